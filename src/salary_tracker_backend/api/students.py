'''
API endpoints for managing students and their monthly payment cycle.
'''
from typing import Annotated, Any
from uuid import UUID
from fastapi import APIRouter, Depends, status

from ..models import student as student_models
from ..services.student_service import StudentService

class StudentsAPI:
    """
    A class to encapsulate the student endpoints.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/students",
            tags=["Students"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "",
                self.create_student,
                methods=["POST"],
                status_code=status.HTTP_201_CREATED,
                response_model=student_models.StudentCreated)
        self.router.add_api_route(
                "/{teacher_id}",
                self.list_students,
                methods=["GET"],
                response_model=list[student_models.StudentRead])
        self.router.add_api_route(
                "/{student_id}/conduct-class",
                self.conduct_class,
                methods=["PATCH"],
                response_model=student_models.StudentTransitionResult)
        self.router.add_api_route(
                "/{student_id}/mark-paid",
                self.mark_paid,
                methods=["PATCH"],
                response_model=student_models.StudentTransitionResult)
        self.router.add_api_route(
                "/{student_id}/new-month",
                self.start_new_month,
                methods=["PATCH"],
                response_model=student_models.StudentTransitionResult)
        self.router.add_api_route(
                "/{student_id}",
                self.delete_student,
                methods=["DELETE"])

    async def create_student(
        self,
        student_data: student_models.StudentCreate,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Adds a student with no conducted classes and an Unpaid status.
        """
        return await student_service.create_student(student_data)

    async def list_students(
        self,
        teacher_id: str,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> list[Any]:
        """
        Retrieves all students of a teacher.
        """
        return await student_service.get_students_for_teacher(teacher_id)

    async def conduct_class(
        self,
        student_id: UUID,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Counts one conducted class. Rejected once the student is marked as paid.
        """
        return await student_service.conduct_class(student_id)

    async def mark_paid(
        self,
        student_id: UUID,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Marks the student's salary as paid and records carry-over classes.
        """
        return await student_service.mark_paid(student_id)

    async def start_new_month(
        self,
        student_id: UUID,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Starts a new month, counting the carry-over classes from the last one.
        """
        return await student_service.start_new_month(student_id)

    async def delete_student(
        self,
        student_id: UUID,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ):
        """
        Permanently deletes a student.
        """
        await student_service.delete_student(student_id)
        return {"message": "Student deleted successfully"}

# Instantiate the class and export its router
students_api = StudentsAPI()
router = students_api.router
