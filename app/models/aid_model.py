from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class AidType(Base):
    __tablename__ = "aid_types"

    aid_type_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    default_amount = Column(Integer, nullable=False, server_default="0")
    repayment_delay_months = Column(Integer, nullable=False, server_default="0")
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")


class SocialAid(Base):
    __tablename__ = "social_aids"

    __table_args__ = (
        Index("ix_social_aids_status", "status"),
    )

    aid_id = Column(Integer, primary_key=True, index=True)
    beneficiary_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)
    aid_type_id = Column(Integer, ForeignKey("aid_types.aid_type_id", ondelete="RESTRICT"), nullable=False)

    amount = Column(Integer, nullable=False)
    grant_date = Column(Date, nullable=False)
    repayment_due_date = Column(Date, nullable=True)
    reason = Column(Text, nullable=True)
    justification_url = Column(String(500), nullable=True)

    # GRANTED / REPAID
    status = Column(String(20), nullable=False, server_default="GRANTED")

    # NOT_REQUESTED / PENDING / CREATED / FAILED  (aid + debt written in two steps)
    debt_link_status = Column(String(20), nullable=False, server_default="NOT_REQUESTED")

    granted_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    beneficiary = relationship("Member", lazy="joined")
    aid_type = relationship("AidType", lazy="joined")


class SovereignFundDebt(Base):
    """Repayment obligation spawned by an aid; lives on independently of the aid's status."""

    __tablename__ = "sovereign_fund_debts"

    debt_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)
    aid_id = Column(Integer, ForeignKey("social_aids.aid_id", ondelete="RESTRICT"), unique=True, nullable=False)

    owed_amount = Column(Integer, nullable=False)
    paid_amount = Column(Integer, nullable=False, server_default="0")
    remaining_amount = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=True)

    # IN_PROGRESS / SETTLED  (OVERDUE is derived)
    status = Column(String(20), nullable=False, server_default="IN_PROGRESS")
    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    member = relationship("Member", lazy="joined")
    payments = relationship(
        "DebtPayment",
        back_populates="debt",
        order_by="DebtPayment.payment_id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class DebtPayment(Base):
    __tablename__ = "sovereign_fund_debt_payments"

    payment_id = Column(Integer, primary_key=True, index=True)
    debt_id = Column(Integer, ForeignKey("sovereign_fund_debts.debt_id", ondelete="CASCADE"), nullable=False, index=True)

    amount = Column(Integer, nullable=False)
    payment_date = Column(Date, nullable=False)
    remarks = Column(Text, nullable=True)
    recorded_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now())

    debt = relationship("SovereignFundDebt", back_populates="payments")
