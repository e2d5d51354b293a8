import json
import logging
from typing import Any

from sqlalchemy.orm import Session

from app.core.errors import ConflictError, NotFoundError
from app.models.system_settings_model import Configuration
from app.repositories import gateways
from app.services.common import unwrap

logger = logging.getLogger(__name__)


def _find(db: Session, key: str):
    rows = unwrap(gateways.configurations(db).get_by_period(key=key))
    return rows[0] if rows else None


def decode_value(raw: str, value_type: str) -> Any:
    """Typed read of a stored string. Malformed values degrade to the raw string."""
    if value_type == "number":
        try:
            number = float(raw)
        except (TypeError, ValueError):
            logger.warning("configuration number %r is malformed, returning raw", raw)
            return raw
        return int(number) if number.is_integer() else number
    if value_type == "boolean":
        return raw == "true"
    if value_type == "json":
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("configuration json %r is malformed, returning raw", raw)
            return raw
    return raw


def encode_value(value: Any, value_type: str) -> str:
    if value_type == "boolean":
        if isinstance(value, str):
            return "true" if value.strip().lower() == "true" else "false"
        return "true" if value else "false"
    if value_type == "json" and not isinstance(value, str):
        return json.dumps(value)
    return str(value)


def get_value(db: Session, key: str) -> Any:
    row = _find(db, key)
    if not row:
        raise NotFoundError(f"Setting '{key}' not found")
    return decode_value(row.value, row.value_type)


def get_value_or(db: Session, key: str, default: Any) -> Any:
    """Like get_value but falls back when the key is missing or not usable."""
    row = _find(db, key)
    if not row:
        return default
    value = decode_value(row.value, row.value_type)
    if value is None or value == "":
        return default
    if isinstance(default, (int, float)) and not isinstance(value, (int, float)):
        return default
    return value


def list_settings(db: Session, category: str = None) -> list[Configuration]:
    return unwrap(gateways.configurations(db).get_by_period(category=category))


def create_setting(db: Session, key: str, value: Any, value_type: str = "text", description: str = "",
                   category: str = "general", editable: bool = True, actor: str = None) -> Configuration:
    key = key.strip()
    if _find(db, key):
        raise ConflictError("Setting key already exists")

    obj = unwrap(gateways.configurations(db).create({
        "key": key,
        "value": encode_value(value, value_type).strip(),
        "value_type": value_type,
        "description": (description or "").strip(),
        "category": category,
        "editable": editable,
        "updated_by": actor,
    }))
    logger.info("setting %s created (%s)", key, value_type)
    return obj


def set_value(db: Session, key: str, value: Any, actor: str = None) -> Configuration:
    row = _find(db, key)
    if not row:
        raise NotFoundError("Setting not found")
    if not row.editable:
        raise ConflictError(f"Setting '{key}' is not editable")

    obj = unwrap(gateways.configurations(db).update(row.config_id, {
        "value": encode_value(value, row.value_type),
        "updated_by": actor,
    }))
    logger.info("setting %s updated by %s", key, actor or "-")
    return obj
