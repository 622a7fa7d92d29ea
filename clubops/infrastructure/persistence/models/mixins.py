"""SQLAlchemy mixins for common model patterns (DRY).

Provides: CuidMixin, TimestampMixin, ApprovalStampMixin.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from clubops.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class ApprovalStampMixin:
    """Mixin for gated entities: approved flag plus the approval request that wrote the row.

    approval_request_id is indexed because replaying an accepted request looks
    the row up by it before inserting.
    """

    @declared_attr
    def approved(cls) -> Mapped[bool]:
        return mapped_column(Boolean, nullable=False, default=False)

    @declared_attr
    def approval_request_id(cls) -> Mapped[str | None]:
        return mapped_column(String, nullable=True, index=True)


class GatedModel(CuidMixin, TimestampMixin, ApprovalStampMixin):
    """Combined mixin: CUID + timestamps + approval stamp. Common for gated domain rows."""

    __abstract__ = True
