'''
Student payroll state machine.

A student record cycles between two payment states:

    Unpaid --(mark paid)--> Paid --(new month)--> Unpaid --> ...

Classes are only counted while Unpaid. Marking the student as Paid keeps
`classes_conducted` as the total for the closed month and stores the classes
conducted beyond `teaching_days` in `carry_over_classes`. Starting a new month
replaces `classes_conducted` with that carry-over and clears it.

`StudentState` holds the transition rules as pure functions. `StudentPayroll`
applies them through a persistence collaborator, which must perform each
transition atomically.
'''
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable, Optional, Sequence
from uuid import UUID

from ..common.exceptions import StudentNotFoundError, PaymentPolicyError
from ..common.logger import log
from ..database import models as db_models
from ..database.db_enums import PaymentStatus
from ..database.repository import StudentRepository
from ..models import student as student_models


def compute_carry_over(classes_conducted: int, teaching_days: int) -> int:
    """Classes conducted beyond the monthly target, never negative."""
    return max(0, classes_conducted - teaching_days)


@dataclass(frozen=True)
class StudentState:
    """The payment-cycle fields of one student."""
    teaching_days: int
    classes_conducted: int = 0
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    last_paid_date: Optional[datetime] = None
    carry_over_classes: int = 0

    @classmethod
    def from_record(cls, student: db_models.Students) -> "StudentState":
        return cls(
            teaching_days=student.teaching_days or 0,
            classes_conducted=student.classes_conducted or 0,
            payment_status=PaymentStatus(student.payment_status),
            last_paid_date=student.last_paid_date,
            carry_over_classes=student.carry_over_classes or 0,
        )

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def conduct_class(self) -> "StudentState":
        if self.is_paid:
            raise PaymentPolicyError(
                None, "Student is already marked as paid. Start a new month to add classes."
            )
        return replace(self, classes_conducted=self.classes_conducted + 1)

    def mark_paid(self, paid_at: datetime) -> "StudentState":
        # Re-marking keeps the first payment; carry-over is computed once per cycle.
        if self.is_paid:
            return self
        return replace(
            self,
            payment_status=PaymentStatus.PAID,
            last_paid_date=paid_at,
            carry_over_classes=compute_carry_over(self.classes_conducted, self.teaching_days),
        )

    def start_new_cycle(self) -> "StudentState":
        return replace(
            self,
            classes_conducted=self.carry_over_classes,
            payment_status=PaymentStatus.UNPAID,
            last_paid_date=None,
            carry_over_classes=0,
        )


@dataclass
class SalarySummary:
    total_salary: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    total_unpaid: Decimal = Decimal("0")
    paid_students: list = field(default_factory=list)
    unpaid_students: list = field(default_factory=list)


def summarize_salaries(students: Sequence[db_models.Students]) -> SalarySummary:
    """
    Partitions a teacher's students by payment status and sums their salaries.
    Anything that is not Paid counts as unpaid.
    """
    summary = SalarySummary()
    for student in students:
        salary = Decimal(student.salary or 0)
        summary.total_salary += salary
        if PaymentStatus(student.payment_status) == PaymentStatus.PAID:
            summary.total_paid += salary
            summary.paid_students.append(student)
        else:
            summary.total_unpaid += salary
            summary.unpaid_students.append(student)
    return summary


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StudentPayroll:
    """
    Runs the payroll transitions for student records.

    The repository is injected so the same rules run against the database
    in production and against an in-memory store in tests. Every transition
    is a single atomic repository call; when it matches no row, the record
    is looked up once only to report why.
    """
    def __init__(
        self,
        repository: StudentRepository,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.repository = repository
        self.clock = clock

    async def _get_existing(self, student_id: UUID) -> db_models.Students:
        student = await self.repository.find_by_id(student_id)
        if student is None:
            log.warning(f"Student {student_id} not found.")
            raise StudentNotFoundError(student_id)
        return student

    # --- Record creation & query ---

    async def add_student(self, data: student_models.StudentCreate) -> db_models.Students:
        """
        Creates a student in the initial state of a cycle: no classes,
        Unpaid, no carry-over.
        """
        initial = StudentState(teaching_days=data.teaching_days)
        student = db_models.Students(
            teacher_id=data.teacher_id,
            name=data.name,
            teaching_days=initial.teaching_days,
            salary=data.salary,
            transport_cost=data.transport_cost,
            classes_conducted=initial.classes_conducted,
            payment_status=initial.payment_status,
            last_paid_date=initial.last_paid_date,
            carry_over_classes=initial.carry_over_classes,
        )
        await self.repository.insert(student)
        log.info(f"Added student '{student.name}' ({student.id}) for teacher {student.teacher_id}")
        return student

    async def list_students(self, teacher_id: str) -> list[db_models.Students]:
        return list(await self.repository.find_by_teacher(teacher_id))

    async def salary_summary(self, teacher_id: str) -> SalarySummary:
        students = await self.repository.find_by_teacher(teacher_id)
        return summarize_salaries(students)

    # --- Transitions ---

    async def conduct_class(self, student_id: UUID) -> db_models.Students:
        """Counts one class. Rejected with PaymentPolicyError once Paid."""
        modified = await self.repository.increment_classes_if_unpaid(student_id)
        student = await self._get_existing(student_id)
        if modified == 0:
            log.warning(f"Rejected class for student {student_id}: already marked as paid.")
            raise PaymentPolicyError(
                student_id,
                "Student is already marked as paid. Start a new month to add classes."
            )
        log.info(f"Student {student_id} classes conducted: {student.classes_conducted}")
        return student

    async def mark_paid(self, student_id: UUID) -> db_models.Students:
        """
        Closes the cycle and records the carry-over. Marking a student that is
        already Paid leaves the record untouched.
        """
        modified = await self.repository.close_cycle_if_unpaid(student_id, self.clock())
        student = await self._get_existing(student_id)
        if modified == 0:
            log.info(f"Student {student_id} was already marked as paid; nothing changed.")
        else:
            log.info(
                f"Student {student_id} marked as paid with "
                f"{student.carry_over_classes} carry-over classes."
            )
        return student

    async def start_new_cycle(self, student_id: UUID) -> db_models.Students:
        modified = await self.repository.open_new_cycle(student_id)
        if modified == 0:
            log.warning(f"Student {student_id} not found for new month.")
            raise StudentNotFoundError(student_id)
        student = await self._get_existing(student_id)
        log.info(f"Student {student_id} reset for new month starting at {student.classes_conducted} classes.")
        return student

    async def remove_student(self, student_id: UUID) -> None:
        deleted = await self.repository.delete(student_id)
        if deleted == 0:
            log.warning(f"Student {student_id} not found for deletion.")
            raise StudentNotFoundError(student_id)
        log.info(f"Deleted student {student_id}")
