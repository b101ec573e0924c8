"""Error taxonomy for workflow operations.

Every error carries a stable ``code`` (used on the wire) and the HTTP status
the API layer renders it with.
"""
from typing import Optional


class WorkflowError(Exception):
    status_code = 400
    code = "WorkflowError"
    default_message = "Request could not be completed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(WorkflowError):
    status_code = 401
    code = "Unauthorized"
    default_message = "Authentication required."


class Forbidden(WorkflowError):
    status_code = 403
    code = "Forbidden"
    default_message = "You don't have access to this project."


class NotFound(WorkflowError):
    status_code = 404
    code = "NotFound"
    default_message = "Not found."


class ValidationError(WorkflowError):
    status_code = 400
    code = "ValidationError"
    default_message = "Invalid request."


class BacklogStatusMismatch(ValidationError):
    code = "BacklogStatusMismatch"
    default_message = "Backlog items must use Backlog status."


class SprintStatusMismatch(ValidationError):
    code = "SprintStatusMismatch"
    default_message = "Sprint items cannot use Backlog status."


class InvalidSprintReference(ValidationError):
    code = "InvalidSprintReference"
    default_message = "Sprint does not exist or is archived."


class InvalidAssignee(ValidationError):
    code = "InvalidAssignee"
    default_message = "Assignee must be a member of the project."


class InvalidTransition(ValidationError):
    code = "InvalidTransition"
    default_message = "Sprint transition is not allowed."


class ArchivedSprintActivation(InvalidTransition):
    code = "ArchivedSprintActivation"
    default_message = "Cannot activate archived sprint."


class CannotRemoveOwner(ValidationError):
    code = "CannotRemoveOwner"
    default_message = "Owner cannot be removed from the project."


class Conflict(WorkflowError):
    status_code = 409
    code = "Conflict"
    default_message = "Request conflicts with the current state."


class AlreadyMember(Conflict):
    code = "AlreadyMember"
    default_message = "User is already a member of this project."


class ConcurrencyConflict(Conflict):
    code = "ConcurrencyConflict"
    default_message = "The record was modified by another request. Please retry."
