from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PersistenceError
from app.models.member_model import Member
from app.repositories import gateways
from app.repositories.gateway import Gateway, GatewayResult
from app.utils.obligation_status import MemberStatus


def unwrap(result: GatewayResult):
    """Turn a gateway error value into a PersistenceError (message verbatim)."""
    if result.error:
        raise PersistenceError(result.error)
    return result.data


def require(gateway: Gateway, record_id: int, label: str):
    obj = unwrap(gateway.get_by_id(record_id))
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def get_member(db: Session, member_id: int) -> Member:
    return require(gateways.members(db), member_id, "Member")


def get_active_member(db: Session, member_id: int) -> Member:
    member = unwrap(gateways.members(db).get_by_id(member_id))
    if member is None or member.status != MemberStatus.ACTIVE:
        raise NotFoundError("Member not found / inactive")
    return member
