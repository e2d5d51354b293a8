"""
Uniform data-access gateway, one instance per record kind.

Every call returns a GatewayResult: the data, or the backend's error message.
No exception leaves this module for database failures; callers check `.error`.
"""
import logging
from typing import Any, Generic, NamedTuple, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class GatewayResult(NamedTuple):
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class Gateway(Generic[ModelT]):
    def __init__(
            self,
            db: Session,
            model: type,
            member_field: Optional[str] = None,
            order_by=None,
    ):
        self.db = db
        self.model = model
        self.member_field = member_field
        self.order_by = order_by
        self.pk = model.__mapper__.primary_key[0]

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _query(self):
        q = self.db.query(self.model)
        if self.order_by is not None:
            q = q.order_by(*self.order_by) if isinstance(self.order_by, (list, tuple)) else q.order_by(self.order_by)
        return q

    def _fail(self, action: str, exc: SQLAlchemyError) -> GatewayResult:
        self.db.rollback()
        msg = _error_message(exc)
        logger.warning("%s.%s failed: %s", self.name, action, msg)
        return GatewayResult(None, msg)

    # -------------------------------------------------
    # Reads
    # -------------------------------------------------
    def get_all(self) -> GatewayResult:
        try:
            return GatewayResult(self._query().all())
        except SQLAlchemyError as e:
            return self._fail("get_all", e)

    def get_by_id(self, record_id: int) -> GatewayResult:
        try:
            obj = self.db.query(self.model).filter(self.pk == record_id).first()
        except SQLAlchemyError as e:
            return self._fail("get_by_id", e)
        # missing record: no error, data is None
        return GatewayResult(obj)

    def _require(self, record_id: int) -> GatewayResult:
        found = self.get_by_id(record_id)
        if found.ok and found.data is None:
            return GatewayResult(None, f"{self.model.__name__} {record_id} not found")
        return found

    def get_by_member(self, member_id: int) -> GatewayResult:
        if self.member_field is None:
            return GatewayResult(None, f"{self.name} is not scoped by member")
        try:
            col = getattr(self.model, self.member_field)
            return GatewayResult(self._query().filter(col == member_id).all())
        except SQLAlchemyError as e:
            return self._fail("get_by_member", e)

    def get_by_period(self, **filters) -> GatewayResult:
        """Equality filters on any columns, e.g. get_by_period(month=3, year=2025)."""
        try:
            q = self._query()
            for field, value in filters.items():
                if value is not None:
                    q = q.filter(getattr(self.model, field) == value)
            return GatewayResult(q.all())
        except SQLAlchemyError as e:
            return self._fail("get_by_period", e)

    # -------------------------------------------------
    # Writes
    # -------------------------------------------------
    def create(self, fields: dict, commit: bool = True) -> GatewayResult:
        obj = self.model(**fields)
        try:
            self.db.add(obj)
            if commit:
                self.db.commit()
                self.db.refresh(obj)
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            return self._fail("create", e)
        return GatewayResult(obj)

    def update(self, record_id: int, partial_fields: dict, commit: bool = True) -> GatewayResult:
        found = self._require(record_id)
        if not found.ok:
            return found

        obj = found.data
        for field, value in partial_fields.items():
            setattr(obj, field, value)
        try:
            if commit:
                self.db.commit()
                self.db.refresh(obj)
            else:
                self.db.flush()
        except SQLAlchemyError as e:
            return self._fail("update", e)
        return GatewayResult(obj)

    def delete(self, record_id: int) -> GatewayResult:
        found = self._require(record_id)
        if not found.ok:
            return found
        try:
            self.db.delete(found.data)
            self.db.commit()
        except SQLAlchemyError as e:
            return self._fail("delete", e)
        return GatewayResult(record_id)
