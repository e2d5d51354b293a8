from datetime import date, datetime
from typing import Optional

from app.utils.ledger_calculations import to_fcfa

MONTH_NAMES = [
    "Janvier", "Février", "Mars", "Avril", "Mai", "Juin",
    "Juillet", "Août", "Septembre", "Octobre", "Novembre", "Décembre",
]


def format_currency(amount) -> str:
    """2450000 -> '2 450 000 FCFA' (no decimals, space-grouped)."""
    value = to_fcfa(amount)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(value):,}".replace(",", " ")
    return f"{sign}{grouped} FCFA"


def month_name(month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return MONTH_NAMES[month - 1]


def format_date(d: Optional[date]) -> str:
    if d is None:
        return ""
    return d.strftime("%d/%m/%Y")


def format_long_date(d: Optional[date]) -> str:
    """date(2025, 1, 15) -> '15 janvier 2025'"""
    if d is None:
        return ""
    return f"{d.day} {month_name(d.month).lower()} {d.year}"


def format_datetime(dt: Optional[datetime]) -> str:
    if dt is None:
        return ""
    return dt.strftime("%d/%m/%Y %H:%M")


def period_label(month: int, year: int) -> str:
    return f"{month_name(month)} {year}"
