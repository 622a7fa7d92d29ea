"""Domain exceptions for club operations.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class ClubOpsException(Exception):
    """Base exception for all club operations errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the uniform error envelope."""
        return {
            "success": False,
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(ClubOpsException):
    """Raised when input validation fails (missing field, value outside its domain)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidRequestTypeException(ClubOpsException):
    """Raised when a request type tag is outside the queueable taxonomy."""

    def __init__(self, request_type: str) -> None:
        super().__init__(
            f"Invalid request type: {request_type}",
            "INVALID_REQUEST_TYPE",
            {"field": "request_type", "request_type": request_type},
        )


class AuthenticationException(ClubOpsException):
    """Raised when the caller credential is missing or invalid."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(ClubOpsException):
    """Raised when the caller's role lacks permission for the exact action."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Insufficient permission",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional domain (e.g. 'finance', 'approval').
            action: Optional action that was attempted (e.g. 'add', 'resolve').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Insufficient permission: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class SelfRevocationDeniedException(ClubOpsException):
    """Raised when the top role holder tries to revoke their own assignment."""

    def __init__(self, actor_id: str) -> None:
        super().__init__(
            "The president cannot revoke their own role; appoint a successor instead",
            "SELF_REVOCATION_DENIED",
            {"actor_id": actor_id},
        )


class ResourceNotFoundException(ClubOpsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'finance_record', 'approval_request').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class RoleAlreadyAssignedException(ClubOpsException):
    """Raised when appointing an actor who already holds an active role."""

    def __init__(self, actor_id: str, current_role: str) -> None:
        super().__init__(
            f"Actor already holds the active role '{current_role}'; revoke it first",
            "ROLE_ALREADY_ASSIGNED",
            {"actor_id": actor_id, "current_role": current_role},
        )


class AlreadyResolvedException(ClubOpsException):
    """Raised when resolving a request that is no longer pending."""

    def __init__(self, request_id: str, status: str) -> None:
        super().__init__(
            f"Approval request {request_id} has already been {status}",
            "ALREADY_RESOLVED",
            {"request_id": request_id, "status": status},
        )


class AlreadyExecutedException(ClubOpsException):
    """Raised when retrying execution of a request that is not approved-and-unapplied."""

    def __init__(self, request_id: str, status: str) -> None:
        super().__init__(
            f"Approval request {request_id} is not awaiting execution (status: {status})",
            "ALREADY_EXECUTED",
            {"request_id": request_id, "status": status},
        )


class SqlNotConfiguredException(ClubOpsException):
    """Raised when an operation needs the database but DATABASE_URL is not set."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
