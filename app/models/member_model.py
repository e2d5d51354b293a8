from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class Member(Base):
    __tablename__ = "members"

    __table_args__ = (
        Index("ix_members_status", "status"),
    )

    member_id = Column(Integer, primary_key=True, index=True)

    email = Column(String(150), unique=True, nullable=False)
    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    photo_url = Column(String(500), nullable=True)

    # ACTIVE / INACTIVE / SUSPENDED
    status = Column(String(20), nullable=False, server_default="ACTIVE")

    monthly_due_amount = Column(Integer, nullable=False, server_default="0")
    join_date = Column(Date, nullable=False)

    created_on = Column(DateTime, server_default=func.now(), nullable=True)
    updated_on = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=True)

    status_history = relationship(
        "MemberStatusHistory",
        back_populates="member",
        order_by="MemberStatusHistory.history_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class MemberStatusHistory(Base):
    __tablename__ = "member_status_history"

    history_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="CASCADE"), nullable=False, index=True)

    old_status = Column(String(20), nullable=False)
    new_status = Column(String(20), nullable=False)
    reason = Column(Text, nullable=True)
    changed_by = Column(String(150), nullable=True)
    changed_on = Column(DateTime, server_default=func.now(), nullable=False)

    member = relationship("Member", back_populates="status_history")
