'''
Static enums shared by the ORM models and the pydantic API models.
'''
import enum

class ListableEnum(str, enum.Enum):
    """A custom Enum base class that can list all member values."""
    @classmethod
    def get_all_names(cls) -> list[str]:
        return [member.value for member in cls]

class PaymentStatus(ListableEnum):
    UNPAID = "Unpaid"
    PAID = "Paid"
