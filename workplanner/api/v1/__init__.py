"""Version 1 of the HTTP API, mounted under ``/api``."""
from fastapi import APIRouter

from workplanner.api.v1 import auth, projects, sprints, summaries, tasks, users, work_entries

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(sprints.router, prefix="/projects", tags=["sprints"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(work_entries.router, prefix="/work-entries", tags=["work-entries"])
api_router.include_router(summaries.router, prefix="/summaries", tags=["summaries"])
