from datetime import date, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import workplanner.models as models
from workplanner.auth import get_password_hash
from workplanner.database import Base
from workplanner.workflow.projects import ProjectService
from workplanner.workflow.sprints import SprintStateMachine

TEST_DATABASE_URL = "sqlite://"
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def db_session() -> Session:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def make_user(session: Session, email: str, first_name: str = "Test", last_name: str = "User") -> models.User:
    user = models.User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=get_password_hash("secret123"),
    )
    session.add(user)
    session.commit()
    return user


def make_project(session: Session, owner: models.User, name: str = "Demo Project", members=()) -> models.Project:
    service = ProjectService(session)
    project = service.create_project(owner.id, name)
    for member in members:
        service.add_member(owner.id, project.id, member.email)
    return project


def make_sprint(session: Session, actor: models.User, project: models.Project, name: str = "Sprint", is_active=False):
    start = date(2024, 1, 1)
    return SprintStateMachine(session).create(
        actor.id,
        project.id,
        name=name,
        start_date=start,
        end_date=start + timedelta(days=13),
        is_active=is_active,
    )


@pytest.fixture
def owner(db_session: Session) -> models.User:
    return make_user(db_session, "owner@example.com", "Olive", "Owner")


@pytest.fixture
def member(db_session: Session) -> models.User:
    return make_user(db_session, "member@example.com", "Mel", "Member")


@pytest.fixture
def outsider(db_session: Session) -> models.User:
    return make_user(db_session, "outsider@example.com", "Otto", "Outsider")


@pytest.fixture
def project(db_session: Session, owner, member) -> models.Project:
    return make_project(db_session, owner, members=[member])


@pytest.fixture
def file_sessions(tmp_path):
    """Two independent sessions on one file database, for interleaving requests."""
    file_engine = create_engine(f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=file_engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    first, second = factory(), factory()
    try:
        yield first, second
    finally:
        first.close()
        second.close()
        file_engine.dispose()
