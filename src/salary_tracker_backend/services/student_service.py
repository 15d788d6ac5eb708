'''

'''
from typing import Annotated
from uuid import UUID
from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.engine import get_db_session
from ..database.repository import SQLAlchemyStudentRepository
from ..core.payroll import StudentPayroll
from ..common.exceptions import StudentNotFoundError, PaymentPolicyError
from ..models import student as student_models
from ..common.logger import log


class StudentService:
    """
    Service for student records and their monthly payment cycle.
    Translates the payroll core's errors into HTTP errors.
    """
    def __init__(
        self,
        db: Annotated[AsyncSession, Depends(get_db_session)]
    ):
        self.db = db
        self.payroll = StudentPayroll(SQLAlchemyStudentRepository(db))

    def _server_error(self, action: str, e: Exception) -> HTTPException:
        log.error(f"Database error while {action}: {e}", exc_info=True)
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Server error while {action}."
        )

    async def create_student(self, data: student_models.StudentCreate) -> student_models.StudentCreated:
        log.info(f"Creating student '{data.name}' for teacher {data.teacher_id}")
        try:
            student = await self.payroll.add_student(data)
            return student_models.StudentCreated(
                message="Student added successfully",
                inserted_id=student.id
            )
        except Exception as e:
            raise self._server_error("creating student", e)

    async def get_students_for_teacher(self, teacher_id: str) -> list[student_models.StudentRead]:
        try:
            students = await self.payroll.list_students(teacher_id)
            return [student_models.StudentRead.model_validate(s) for s in students]
        except Exception as e:
            raise self._server_error("fetching students", e)

    async def get_salary_tracking(self, teacher_id: str) -> student_models.SalaryTrackingRead:
        try:
            summary = await self.payroll.salary_summary(teacher_id)
            return student_models.SalaryTrackingRead.model_validate(summary)
        except Exception as e:
            raise self._server_error("fetching salary tracking", e)

    async def conduct_class(self, student_id: UUID) -> student_models.StudentTransitionResult:
        try:
            student = await self.payroll.conduct_class(student_id)
            return student_models.StudentTransitionResult(
                message="Class conducted count updated successfully",
                student=student_models.StudentRead.model_validate(student)
            )
        except StudentNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        except PaymentPolicyError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
        except Exception as e:
            raise self._server_error("updating class count", e)

    async def mark_paid(self, student_id: UUID) -> student_models.StudentTransitionResult:
        try:
            student = await self.payroll.mark_paid(student_id)
            return student_models.StudentTransitionResult(
                message="Payment status updated to Paid",
                student=student_models.StudentRead.model_validate(student)
            )
        except StudentNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        except Exception as e:
            raise self._server_error("updating payment status", e)

    async def start_new_month(self, student_id: UUID) -> student_models.StudentTransitionResult:
        try:
            student = await self.payroll.start_new_cycle(student_id)
            return student_models.StudentTransitionResult(
                message="Student reset for new month.",
                student=student_models.StudentRead.model_validate(student)
            )
        except StudentNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        except Exception as e:
            raise self._server_error("resetting month", e)

    async def delete_student(self, student_id: UUID) -> None:
        try:
            await self.payroll.remove_student(student_id)
        except StudentNotFoundError:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        except Exception as e:
            raise self._server_error("deleting student", e)
