from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class SavingsDeposit(Base):
    __tablename__ = "savings_deposits"

    __table_args__ = (
        Index("ix_savings_exercise_status", "exercise", "status"),
    )

    deposit_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)

    exercise = Column(Integer, nullable=False)
    amount = Column(Integer, nullable=False)
    deposit_date = Column(Date, nullable=False)

    # ACTIVE / REPAID
    status = Column(String(20), nullable=False, server_default="ACTIVE")
    repayment_date = Column(Date, nullable=True)
    interest_received = Column(Integer, nullable=False, server_default="0")

    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    member = relationship("Member", lazy="joined")
