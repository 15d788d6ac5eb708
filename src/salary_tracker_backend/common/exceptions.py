"""
This file contains custom, application-specific exceptions.
"""

class PayrollError(Exception):
    """Base class for errors raised by the student payroll core."""
    pass

class StudentNotFoundError(PayrollError):
    """Raised when a student ID is not found in the database."""
    def __init__(self, student_id):
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found.")

class PaymentPolicyError(PayrollError):
    """
    Raised when a transition is valid input but forbidden by the student's
    current payment status (e.g. conducting a class after payment).
    """
    def __init__(self, student_id, message: str):
        self.student_id = student_id
        super().__init__(message)
