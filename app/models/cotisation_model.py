from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class Cotisation(Base):
    __tablename__ = "cotisations"

    __table_args__ = (
        Index("ix_cotisations_period", "year", "month"),
        # one cotisation per member and period
        Index("ix_cotisations_member_period", "member_id", "year", "month", unique=True),
    )

    cotisation_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)

    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)

    # snapshot of member.monthly_due_amount at creation time
    expected_amount = Column(Integer, nullable=False)
    paid_amount = Column(Integer, nullable=False, server_default="0")

    oil_paid = Column(Boolean, nullable=False, default=False, server_default="false")
    soap_paid = Column(Boolean, nullable=False, default=False, server_default="false")
    sport_fund_paid = Column(Boolean, nullable=False, default=False, server_default="false")
    sport_fund_amount = Column(Integer, nullable=False, server_default="0")

    # set once something was paid
    payment_date = Column(Date, nullable=True)
    recorded_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    member = relationship("Member", lazy="joined")
