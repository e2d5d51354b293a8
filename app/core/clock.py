from datetime import date


def get_today() -> date:
    """FastAPI dependency for the current calendar date (overridden in tests)."""
    return date.today()
