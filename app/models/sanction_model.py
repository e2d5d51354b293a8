from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class SanctionType(Base):
    __tablename__ = "sanction_types"

    sanction_type_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    # MEETING / SPORT_E2D / SPORT_PHOENIX / DISCIPLINARY
    category = Column(String(20), nullable=False, index=True)
    default_amount = Column(Integer, nullable=False, server_default="0")
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="true")


class Sanction(Base):
    __tablename__ = "sanctions"

    __table_args__ = (
        Index("ix_sanctions_member_status", "member_id", "status"),
    )

    sanction_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False, index=True)
    sanction_type_id = Column(
        Integer, ForeignKey("sanction_types.sanction_type_id", ondelete="RESTRICT"), nullable=False, index=True
    )

    amount = Column(Integer, nullable=False)
    reason = Column(Text, nullable=True)
    sanction_date = Column(Date, nullable=False)

    # UNPAID / PAID / CANCELLED
    status = Column(String(20), nullable=False, server_default="UNPAID")
    payment_date = Column(Date, nullable=True)

    # system-triggered (e.g. red card) vs manual entry
    automatic = Column(Boolean, nullable=False, default=False, server_default="false")
    recorded_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now(), nullable=True)

    member = relationship("Member", lazy="joined")
    sanction_type = relationship("SanctionType", lazy="joined")
