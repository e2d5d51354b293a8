# app/models/loan_model.py

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    Numeric,
    ForeignKey,
    Index,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.utils.database import Base


class Loan(Base):
    __tablename__ = "loans"

    __table_args__ = (
        Index("ix_loans_status", "status"),
        Index("ix_loans_borrower_status", "borrower_id", "status"),
    )

    loan_id = Column(Integer, primary_key=True, index=True)
    borrower_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)

    principal_amount = Column(Integer, nullable=False)
    interest_rate = Column(Numeric(5, 2), nullable=False, server_default="5")
    # fixed at creation (or explicit principal edit), never touched by renewals
    interest_amount = Column(Integer, nullable=False, server_default="0")

    grant_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    repayment_date = Column(Date, nullable=True)

    # ACTIVE / REPAID / RENEWED  (OVERDUE is derived at read time, never stored)
    status = Column(String(20), nullable=False, server_default="ACTIVE")
    renewal_count = Column(Integer, nullable=False, server_default="0")

    document_url = Column(String(500), nullable=True)
    granted_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    borrower = relationship("Member", lazy="joined")
