'''
Persistence collaborator for student records.

The payroll core only talks to the `StudentRepository` protocol, so it can be
driven by any implementation. `SQLAlchemyStudentRepository` is the production
one; each payment transition is issued as one conditional UPDATE statement so
that concurrent requests on the same student can not interleave a read and a
write.
'''
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..common.logger import log
from .db_enums import PaymentStatus
from .models import Students


class StudentRepository(Protocol):
    async def find_by_id(self, student_id: UUID) -> Optional[Students]:
        raise NotImplementedError

    async def find_by_teacher(self, teacher_id: str) -> Sequence[Students]:
        raise NotImplementedError

    async def insert(self, student: Students) -> UUID:
        raise NotImplementedError

    async def update_fields(self, student_id: UUID, fields: Mapping[str, Any]) -> int:
        raise NotImplementedError

    async def delete(self, student_id: UUID) -> int:
        raise NotImplementedError

    async def increment_classes_if_unpaid(self, student_id: UUID) -> int:
        """Adds one conducted class, only while the student is Unpaid."""

        raise NotImplementedError

    async def close_cycle_if_unpaid(self, student_id: UUID, paid_at: datetime) -> int:
        """Marks an Unpaid student as Paid and stores the carry-over."""

        raise NotImplementedError

    async def open_new_cycle(self, student_id: UUID) -> int:
        """Moves carry-over into the conducted count and resets to Unpaid."""

        raise NotImplementedError


class SQLAlchemyStudentRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, student_id: UUID) -> Optional[Students]:
        # populate_existing: the atomic UPDATEs below bypass the identity map
        stmt = (
            select(Students)
            .filter(Students.id == student_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def find_by_teacher(self, teacher_id: str) -> Sequence[Students]:
        stmt = (
            select(Students)
            .filter(Students.teacher_id == teacher_id)
            .order_by(Students.created_at, Students.id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def insert(self, student: Students) -> UUID:
        self.db.add(student)
        await self.db.flush()
        log.info(f"Inserted student {student.id} for teacher {student.teacher_id}")
        return student.id

    async def update_fields(self, student_id: UUID, fields: Mapping[str, Any]) -> int:
        if not fields:
            return 0
        stmt = (
            update(Students)
            .where(Students.id == student_id)
            .values(**fields)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete(self, student_id: UUID) -> int:
        stmt = (
            delete(Students)
            .where(Students.id == student_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def increment_classes_if_unpaid(self, student_id: UUID) -> int:
        stmt = (
            update(Students)
            .where(
                Students.id == student_id,
                Students.payment_status == PaymentStatus.UNPAID
            )
            .values(classes_conducted=Students.classes_conducted + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def close_cycle_if_unpaid(self, student_id: UUID, paid_at: datetime) -> int:
        carry_over = case(
            (
                Students.classes_conducted > Students.teaching_days,
                Students.classes_conducted - Students.teaching_days
            ),
            else_=0
        )
        stmt = (
            update(Students)
            .where(
                Students.id == student_id,
                Students.payment_status == PaymentStatus.UNPAID
            )
            .values(
                payment_status=PaymentStatus.PAID,
                last_paid_date=paid_at,
                carry_over_classes=carry_over
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def open_new_cycle(self, student_id: UUID) -> int:
        # Every right-hand side is evaluated against the row before the update
        stmt = (
            update(Students)
            .where(Students.id == student_id)
            .values(
                classes_conducted=Students.carry_over_classes,
                carry_over_classes=0,
                payment_status=PaymentStatus.UNPAID,
                last_paid_date=None
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount
