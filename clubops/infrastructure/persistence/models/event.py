"""Club event ORM models: event, its groups, numbered tickets and registrations.

Registrations and the claimed counters belong to the registration service;
this service reads them for statistics and removes them with their event.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from clubops.infrastructure.persistence.database import Base
from clubops.infrastructure.persistence.models.mixins import CuidMixin, GatedModel


class ClubEvent(GatedModel, Base):
    """Event. Table: club_event."""

    __tablename__ = "club_event"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="open", index=True)
    registration_link: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)

    groups: Mapped[list["EventGroup"]] = relationship(
        back_populates="event",
        lazy="selectin",
        order_by="EventGroup.name",
    )


class EventGroup(CuidMixin, Base):
    """Registration group of an event. Table: event_group."""

    __tablename__ = "event_group"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("club_event.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    claimed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    share_link: Mapped[str | None] = mapped_column(String, nullable=True)
    checkin_img: Mapped[str | None] = mapped_column(String, nullable=True)
    ticket_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    capacity_per_ticket: Mapped[int] = mapped_column(Integer, nullable=False)

    event: Mapped[ClubEvent] = relationship(back_populates="groups")


class EventTicket(CuidMixin, Base):
    """Numbered ticket of a multi-ticket group. Table: event_ticket."""

    __tablename__ = "event_ticket"

    group_id: Mapped[str] = mapped_column(
        String, ForeignKey("event_group.id"), nullable=False, index=True
    )
    ticket_number: Mapped[int] = mapped_column(Integer, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    claimed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    qr_code_url: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint("group_id", "ticket_number", name="uq_event_ticket_number"),
    )


class Registration(CuidMixin, Base):
    """Actor registration for an event group. Table: registration."""

    __tablename__ = "registration"

    event_id: Mapped[str] = mapped_column(
        String, ForeignKey("club_event.id"), nullable=False, index=True
    )
    group_id: Mapped[str] = mapped_column(
        String, ForeignKey("event_group.id"), nullable=False, index=True
    )
    actor_id: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
