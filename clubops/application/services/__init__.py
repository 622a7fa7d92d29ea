"""Application services: role directory, approval ledger, action executor."""

from clubops.application.services.action_executor import ActionExecutor
from clubops.application.services.approval_ledger import ApprovalLedger
from clubops.application.services.role_directory import RoleDirectoryService

__all__ = [
    "ActionExecutor",
    "ApprovalLedger",
    "RoleDirectoryService",
]
