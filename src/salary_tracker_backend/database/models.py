from typing import Optional

from sqlalchemy import DateTime, Enum, Index, Integer, Numeric, PrimaryKeyConstraint, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
import datetime
import decimal
import uuid

from .db_enums import PaymentStatus

class Base(DeclarativeBase):
    pass



class Users(Base):
    __tablename__ = 'users'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='users_pkey'),
        UniqueConstraint('email', name='users_email_key')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))
    password: Mapped[str] = mapped_column(String(255))
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())


class Students(Base):
    __tablename__ = 'students'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='students_pkey'),
        Index('ix_students_teacher_id', 'teacher_id')
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    teacher_id: Mapped[str] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(255))
    teaching_days: Mapped[int] = mapped_column(Integer, default=0)
    salary: Mapped[decimal.Decimal] = mapped_column(Numeric(12, 2), default=decimal.Decimal('0'))
    transport_cost: Mapped[decimal.Decimal] = mapped_column(Numeric(12, 2), default=decimal.Decimal('0'))
    classes_conducted: Mapped[int] = mapped_column(Integer, default=0)
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name='payment_status_enum', values_callable=lambda e: e.get_all_names()),
        default=PaymentStatus.UNPAID
    )
    last_paid_date: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(True))
    carry_over_classes: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(True), server_default=func.now())
