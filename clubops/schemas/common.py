"""Shared schema base and response envelopes."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire; snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    def fields_set_payload(self, *exclude: str) -> dict[str, Any]:
        """Fields the caller actually sent (snake_case), minus routing keys."""
        return self.model_dump(exclude_unset=True, exclude=set(exclude))


def dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, mode="json")


def queued_response(request_id: str, message: str) -> dict[str, Any]:
    """Envelope for a mutation turned into a pending approval request."""
    return {
        "success": True,
        "needsApproval": True,
        "requestId": request_id,
        "message": message,
    }
