import logging
from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import ConflictError
from app.models.member_model import Member, MemberStatusHistory
from app.repositories import gateways
from app.services.common import get_member, unwrap
from app.utils.obligation_status import MemberStatus

logger = logging.getLogger(__name__)


def _email_taken(db: Session, email: str, exclude_id: Optional[int] = None) -> bool:
    rows = unwrap(gateways.members(db).get_by_period(email=email))
    return any(m.member_id != exclude_id for m in rows)


def list_members(db: Session, status: Optional[str] = None, search: Optional[str] = None) -> list[Member]:
    rows = unwrap(gateways.members(db).get_by_period(status=status))
    if search:
        s = search.strip().lower()
        rows = [
            m for m in rows
            if s in m.last_name.lower() or s in m.first_name.lower() or s in m.email.lower()
        ]
    return rows


def create_member(db: Session, fields: dict, today: date) -> Member:
    if _email_taken(db, fields["email"]):
        raise ConflictError("A member with this email already exists")

    data = dict(fields)
    data["status"] = MemberStatus.ACTIVE
    data["join_date"] = data.get("join_date") or today

    member = unwrap(gateways.members(db).create(data))
    logger.info("member %s created (%s)", member.member_id, member.email)
    return member


def update_member(db: Session, member_id: int, changes: dict) -> Member:
    get_member(db, member_id)
    changes.pop("status", None)

    if "email" in changes and _email_taken(db, changes["email"], exclude_id=member_id):
        raise ConflictError("A member with this email already exists")

    return unwrap(gateways.members(db).update(member_id, changes))


def delete_member(db: Session, member_id: int) -> None:
    # no referential pre-check: a member with records is refused by the database
    get_member(db, member_id)
    unwrap(gateways.members(db).delete(member_id))
    logger.info("member %s deleted", member_id)


def change_status(
        db: Session,
        member_id: int,
        new_status: str,
        reason: Optional[str] = None,
        actor: Optional[str] = None,
) -> Member:
    """History row + live status, written together in one transaction."""
    member = get_member(db, member_id)
    old_status = member.status

    if new_status == old_status:
        raise ConflictError(f"Member is already {old_status}")

    unwrap(gateways.member_status_history(db).create(
        {
            "member_id": member_id,
            "old_status": old_status,
            "new_status": new_status,
            "reason": reason,
            "changed_by": actor,
        },
        commit=False,
    ))
    member = unwrap(gateways.members(db).update(member_id, {"status": new_status}))

    logger.info("member %s status %s -> %s by %s", member_id, old_status, new_status, actor or "-")
    return member


def status_history(db: Session, member_id: int) -> list[MemberStatusHistory]:
    get_member(db, member_id)
    return unwrap(gateways.member_status_history(db).get_by_member(member_id))
