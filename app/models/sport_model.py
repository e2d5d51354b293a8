from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Time, Text, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.utils.database import Base


class PhoenixAdherent(Base):
    """Member of the Phoenix sports club: an association member or an external person."""

    __tablename__ = "phoenix_adherents"

    adherent_id = Column(Integer, primary_key=True, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="SET NULL"), nullable=True, index=True)

    last_name = Column(String(100), nullable=False)
    first_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    email = Column(String(150), nullable=True)
    photo_url = Column(String(500), nullable=True)

    # ACTIVE / INACTIVE / SUSPENDED
    status = Column(String(20), nullable=False, server_default="ACTIVE")
    join_date = Column(Date, nullable=False)

    membership_fee = Column(Integer, nullable=False, server_default="0")
    membership_fee_paid = Column(Boolean, nullable=False, default=False, server_default="false")
    payment_deadline = Column(Date, nullable=True)

    sovereign_fund_amount = Column(Integer, nullable=False, server_default="0")
    sovereign_fund_paid = Column(Boolean, nullable=False, default=False, server_default="false")
    is_organizing_committee = Column(Boolean, nullable=False, default=False, server_default="false")

    created_on = Column(DateTime, server_default=func.now())


class TrainingSession(Base):
    __tablename__ = "training_sessions"

    session_id = Column(Integer, primary_key=True, index=True)
    # E2D / PHOENIX
    club = Column(String(10), nullable=False, index=True)
    session_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    place = Column(String(200), nullable=True)
    description = Column(Text, nullable=True)

    cancelled = Column(Boolean, nullable=False, default=False, server_default="false")
    cancellation_reason = Column(Text, nullable=True)
    created_on = Column(DateTime, server_default=func.now())


class Match(Base):
    __tablename__ = "matches"

    __table_args__ = (
        Index("ix_matches_club_date", "club", "match_date"),
    )

    match_id = Column(Integer, primary_key=True, index=True)
    # E2D / PHOENIX
    club = Column(String(10), nullable=False)
    match_date = Column(Date, nullable=False)
    kickoff_time = Column(Time, nullable=True)
    opponent = Column(String(150), nullable=False)
    opponent_logo_url = Column(String(500), nullable=True)
    place = Column(String(200), nullable=True)

    team_score = Column(Integer, nullable=False, server_default="0")
    opponent_score = Column(Integer, nullable=False, server_default="0")
    # WIN / LOSS / DRAW, null until a score is recorded
    result = Column(String(10), nullable=True)
    # FRIENDLY / LEAGUE / CUP / GALA
    match_type = Column(String(20), nullable=False, server_default="FRIENDLY")
    description = Column(Text, nullable=True)
    created_on = Column(DateTime, server_default=func.now())

    cards = relationship(
        "MatchCard",
        back_populates="match",
        order_by="MatchCard.card_id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class MatchCard(Base):
    __tablename__ = "match_cards"

    card_id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("matches.match_id", ondelete="CASCADE"), nullable=False, index=True)
    member_id = Column(Integer, ForeignKey("members.member_id", ondelete="RESTRICT"), nullable=False)
    # YELLOW / RED
    color = Column(String(10), nullable=False)
    sanction_id = Column(Integer, ForeignKey("sanctions.sanction_id", ondelete="SET NULL"), nullable=True)
    created_on = Column(DateTime, server_default=func.now())

    match = relationship("Match", back_populates="cards")


class SportExpense(Base):
    __tablename__ = "sport_expenses"

    expense_id = Column(Integer, primary_key=True, index=True)
    club = Column(String(10), nullable=False, index=True)
    label = Column(String(200), nullable=False)
    amount = Column(Integer, nullable=False)
    expense_date = Column(Date, nullable=False)
    # EQUIPMENT / TRANSPORT / REFEREEING / MEDICAL / OTHER
    category = Column(String(20), nullable=False, server_default="OTHER")
    justification_url = Column(String(500), nullable=True)
    approved_by = Column(String(150), nullable=True)
    created_on = Column(DateTime, server_default=func.now())


class SportDonation(Base):
    __tablename__ = "sport_donations"

    donation_id = Column(Integer, primary_key=True, index=True)
    club = Column(String(10), nullable=False, index=True)
    donor_name = Column(String(150), nullable=False)
    donor_contact = Column(String(150), nullable=True)
    # cash donation: amount set, in-kind: nature set
    amount = Column(Integer, nullable=True)
    in_kind_nature = Column(Text, nullable=True)
    donation_date = Column(Date, nullable=False)
    description = Column(Text, nullable=True)
    receipt_url = Column(String(500), nullable=True)
    created_on = Column(DateTime, server_default=func.now())
