"""Role directory: who currently holds which club office.

At most one active assignment per actor. Revocation flips is_active and keeps
the row; nothing here hard-deletes.
"""

from __future__ import annotations

from clubops.application.dtos.role_assignment import RoleAssignmentResult, RosterResult
from clubops.application.interfaces.repositories import IRoleAssignmentRepository
from clubops.application.services.action_executor import ActionExecutor
from clubops.domain.enums import MutationDomain, MutationOperation, RoleCode
from clubops.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    RoleAlreadyAssignedException,
    SelfRevocationDeniedException,
    ValidationException,
)
from clubops.domain.policy import is_top_role
from clubops.domain.value_objects import MutationType
from clubops.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_APPOINT = MutationType(MutationDomain.ROLE_DIRECTORY, MutationOperation.ADD)
_REVOKE = MutationType(MutationDomain.ROLE_DIRECTORY, MutationOperation.DELETE)


class RoleDirectoryService:
    """Appoint, revoke and look up role assignments."""

    def __init__(
        self, role_repo: IRoleAssignmentRepository, executor: ActionExecutor
    ) -> None:
        self._role_repo = role_repo
        self._executor = executor

    async def get_active_role(self, actor_id: str) -> RoleCode | None:
        assignment = await self._role_repo.get_active(actor_id)
        return assignment.role if assignment else None

    async def list_roster(self, actor_id: str) -> RosterResult:
        """Caller's own assignment plus every active one.

        Raises:
            AuthorizationException: Caller holds no active role.
        """
        current = await self._role_repo.get_active(actor_id)
        if current is None:
            raise AuthorizationException(resource="role_directory", action="list")
        return RosterResult(current=current, active=await self._role_repo.list_active())

    async def _require_top_role(self, actor_id: str, action: str) -> None:
        if not is_top_role(await self.get_active_role(actor_id)):
            raise AuthorizationException(resource="role_directory", action=action)

    async def appoint(
        self, actor_id: str, target_actor_id: str, role: str | RoleCode
    ) -> RoleAssignmentResult:
        """Give target_actor_id an active role.

        Appointing a president also deactivates the caller's own president
        assignment; both writes share the caller's transaction.

        Raises:
            AuthorizationException: Caller is not the top role holder.
            ValidationException: Missing target or role outside the closed set.
            RoleAlreadyAssignedException: Target already holds an active role.
        """
        await self._require_top_role(actor_id, "appoint")
        if not target_actor_id:
            raise ValidationException("targetActorId is required", field="target_actor_id")
        try:
            role_code = RoleCode(role)
        except ValueError:
            raise ValidationException(
                f"role must be one of: {', '.join(RoleCode.values())}", field="role"
            ) from None

        existing = await self._role_repo.get_active(target_actor_id)
        if existing is not None:
            raise RoleAlreadyAssignedException(target_actor_id, existing.role.value)

        if is_top_role(role_code):
            own = await self._role_repo.get_active(actor_id)
            await self._role_repo.deactivate(own.id, actor_id)
            logger.info("President %s abdicated in favour of %s", actor_id, target_actor_id)

        result = await self._executor.apply(
            _APPOINT,
            {"actor_id": target_actor_id, "role": role_code.value},
            actor_id=actor_id,
        )
        logger.info(
            "Role %s appointed to %s by %s", role_code.value, target_actor_id, actor_id
        )
        return result.entity

    async def revoke(self, actor_id: str, target_actor_id: str) -> RoleAssignmentResult:
        """Deactivate target_actor_id's active role.

        Raises:
            AuthorizationException: Caller is not the top role holder.
            SelfRevocationDeniedException: Caller targets themselves.
            ResourceNotFoundException: Target has no active role.
        """
        await self._require_top_role(actor_id, "revoke")
        if not target_actor_id:
            raise ValidationException("targetActorId is required", field="target_actor_id")
        if target_actor_id == actor_id:
            raise SelfRevocationDeniedException(actor_id)
        if await self._role_repo.get_active(target_actor_id) is None:
            raise ResourceNotFoundException("role_assignment", target_actor_id)

        result = await self._executor.apply(
            _REVOKE, {"actor_id": target_actor_id}, actor_id=actor_id
        )
        logger.info("Role of %s revoked by %s", target_actor_id, actor_id)
        return result.entity
