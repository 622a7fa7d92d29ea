"""ApprovalRequest ORM model. Queued mutation with its one-row lifecycle."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from clubops.domain.enums import ApprovalStatus
from clubops.infrastructure.persistence.database import Base
from clubops.infrastructure.persistence.models.mixins import CuidMixin


class ApprovalRequest(CuidMixin, Base):
    """Approval request. Table: approval_request. payload is written once at insert."""

    __tablename__ = "approval_request"

    request_type: Mapped[str] = mapped_column(String, nullable=False)
    requester_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    justification: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_ref: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=ApprovalStatus.PENDING.value
    )
    reviewer_id: Mapped[str | None] = mapped_column(String, nullable=True)
    reviewer_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    executed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    execution_error: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_approval_request_status_created", "status", "created_at"),
    )
