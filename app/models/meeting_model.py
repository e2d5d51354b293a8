from sqlalchemy import Column, Integer, String, Date, DateTime, Time, Text, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class MeetingReport(Base):
    __tablename__ = "meeting_reports"

    report_id = Column(Integer, primary_key=True, index=True)
    meeting_date = Column(Date, nullable=False, index=True)
    place = Column(String(200), nullable=False)
    host_member_id = Column(Integer, ForeignKey("members.member_id", ondelete="SET NULL"), nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    present_count = Column(Integer, nullable=False, server_default="0")
    absent_count = Column(Integer, nullable=False, server_default="0")

    # DRAFT -> FINALIZED -> APPROVED
    status = Column(String(20), nullable=False, server_default="DRAFT")
    document_url = Column(String(500), nullable=True)
    written_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now())

    host = relationship("Member", lazy="joined")
    agenda_items = relationship(
        "AgendaItem",
        back_populates="report",
        order_by="AgendaItem.item_number",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class AgendaItem(Base):
    __tablename__ = "agenda_items"

    item_id = Column(Integer, primary_key=True, index=True)
    report_id = Column(Integer, ForeignKey("meeting_reports.report_id", ondelete="CASCADE"), nullable=False, index=True)
    item_number = Column(Integer, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # DISCUSSION / DECISION / INFORMATION / VOTE
    item_type = Column(String(20), nullable=False, server_default="DISCUSSION")

    report = relationship("MeetingReport", back_populates="agenda_items")
    resolutions = relationship(
        "Resolution",
        back_populates="agenda_item",
        order_by="Resolution.resolution_id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class Resolution(Base):
    __tablename__ = "resolutions"

    resolution_id = Column(Integer, primary_key=True, index=True)
    item_id = Column(Integer, ForeignKey("agenda_items.item_id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False)
    # DECISION / RECOMMENDATION / ACTION
    resolution_type = Column(String(20), nullable=False, server_default="DECISION")
    responsible_member_id = Column(Integer, ForeignKey("members.member_id", ondelete="SET NULL"), nullable=True)
    deadline = Column(Date, nullable=True)
    # IN_PROGRESS / DONE / POSTPONED / CANCELLED
    status = Column(String(20), nullable=False, server_default="IN_PROGRESS")

    agenda_item = relationship("AgendaItem", back_populates="resolutions")


class HostingSchedule(Base):
    """Who receives the monthly meeting."""

    __tablename__ = "hosting_schedule"

    __table_args__ = (
        UniqueConstraint("year", "month", name="ux_hosting_schedule_period"),
    )

    schedule_id = Column(Integer, primary_key=True, index=True)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    host_member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False)
    place = Column(String(200), nullable=True)
    planned_date = Column(Date, nullable=True)
    actual_date = Column(Date, nullable=True)
    # PLANNED / CONFIRMED / POSTPONED / CANCELLED
    status = Column(String(20), nullable=False, server_default="PLANNED")
    notes = Column(Text, nullable=True)

    host = relationship("Member", lazy="joined")
