"""
Teacher Forms Models

Database model for teacher registration submissions.
Records are written once by the public form and never updated or deleted
by the application.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Enum, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from teacher_registry.core.database import Base


class Qualification(str, enum.Enum):
    """Academic qualification of a registrant (stored by its Arabic label)."""

    LICENSE = "ليسانس"
    BACHELOR = "بكالريوس"
    DIPLOMA = "دبلوم"
    RETIRED = "معاش"
    OTHER = "اخرى"


class TeacherForm(Base):
    """
    Teacher registration submission.

    Location fields are free text: they are chosen from the reference data
    lists on the client but not checked against them here.
    """

    __tablename__ = "teacher_forms"

    # Primary key
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Registrant
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[str] = mapped_column(String(50), nullable=False)
    qualification: Mapped[Qualification] = mapped_column(
        Enum(
            Qualification,
            name="qualification",
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )

    # Location
    place: Mapped[str] = mapped_column(String(200), nullable=False)
    governorate: Mapped[str] = mapped_column(String(200), nullable=False)
    administration: Mapped[str] = mapped_column(String(200), nullable=False)
    school: Mapped[str | None] = mapped_column(String(300), nullable=True)

    # Upload reference assigned by the server
    id_photo_path: Mapped[str] = mapped_column(String(500), nullable=False)

    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    __table_args__ = (Index("ix_teacher_forms_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<TeacherForm {self.id} name={self.name!r}>"
