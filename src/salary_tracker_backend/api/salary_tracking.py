'''
API endpoint for a teacher's salary totals.
'''
from typing import Annotated, Any
from fastapi import APIRouter, Depends

from ..models import student as student_models
from ..services.student_service import StudentService

class SalaryTrackingAPI:
    """
    A class to encapsulate the salary tracking endpoint.
    """
    def __init__(self):
        self.router = APIRouter(
            prefix="/salary-tracking",
            tags=["Salary Tracking"]
        )
        self._register_routes()

    def _register_routes(self):
        """Registers all the API routes for this class."""
        self.router.add_api_route(
                "/{teacher_id}",
                self.get_salary_tracking,
                methods=["GET"],
                response_model=student_models.SalaryTrackingRead)

    async def get_salary_tracking(
        self,
        teacher_id: str,
        student_service: Annotated[StudentService, Depends(StudentService)]
    ) -> Any:
        """
        Sums the salaries of a teacher's students, split into paid and unpaid.
        """
        return await student_service.get_salary_tracking(teacher_id)

# Instantiate the class and export its router
salary_tracking_api = SalaryTrackingAPI()
router = salary_tracking_api.router
