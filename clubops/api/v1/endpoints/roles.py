"""Role directory API: roster, appoint, revoke."""

from fastapi import APIRouter, Request

from clubops.api.v1.dependencies import CurrentActor, ReadServices, WriteServices
from clubops.core.limiter import limit_writes
from clubops.schemas import AppointRequest, RevokeRequest, RoleAssignmentResponse, dump

router = APIRouter()


@router.get("")
async def get_roster(actor: CurrentActor, services: ReadServices):
    """Caller's own role plus the full active roster. Caller must hold a role."""
    roster = await services.roles.list_roster(actor)
    return {
        "success": True,
        "role": roster.current.role.value,
        "roleName": roster.current.role.display_name,
        "current": dump(RoleAssignmentResponse.model_validate(roster.current)),
        "roster": [dump(RoleAssignmentResponse.model_validate(a)) for a in roster.active],
    }


@router.post("", status_code=201)
@limit_writes
async def appoint_role(
    request: Request,
    body: AppointRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    """Appoint targetActorId to role (president only). Appointing a president abdicates."""
    assignment = await services.roles.appoint(actor, body.target_actor_id, body.role)
    return {
        "success": True,
        "assignment": dump(RoleAssignmentResponse.model_validate(assignment)),
        "message": f"{assignment.role.display_name} appointed",
    }


@router.delete("")
@limit_writes
async def revoke_role(
    request: Request,
    body: RevokeRequest,
    actor: CurrentActor,
    services: WriteServices,
):
    """Deactivate targetActorId's role (president only, never themselves)."""
    assignment = await services.roles.revoke(actor, body.target_actor_id)
    return {
        "success": True,
        "assignment": dump(RoleAssignmentResponse.model_validate(assignment)),
        "message": "Role revoked",
    }
