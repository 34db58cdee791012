"""
Teacher Forms Repository

Database operations for teacher registration submissions.
Only insert and read operations exist: submissions are immutable.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TeacherForm
from .schemas import TeacherFormCreate


async def create(db: AsyncSession, data: TeacherFormCreate, id_photo_path: str) -> TeacherForm:
    """Insert a new submission."""

    new_form = TeacherForm(
        name=data.name,
        phone_number=data.phone_number,
        qualification=data.qualification,
        place=data.place,
        governorate=data.governorate,
        administration=data.administration,
        school=data.school,
        id_photo_path=id_photo_path,
        comments=data.comments,
    )

    db.add(new_form)
    await db.commit()
    await db.refresh(new_form)

    return new_form


async def list_newest_first(db: AsyncSession) -> list[TeacherForm]:
    """Get every submission ordered by creation time, newest first."""
    result = await db.execute(
        select(TeacherForm).order_by(TeacherForm.created_at.desc(), TeacherForm.id.desc())
    )
    return list(result.scalars().all())
