from fastapi import Request
from fastapi.responses import JSONResponse


class LedgerError(Exception):
    """Base error of the ledger services. Rendered as {"detail": message}."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerError):
    status_code = 404


class ConflictError(LedgerError):
    status_code = 409


class InvalidTransitionError(LedgerError):
    status_code = 409


class UnderpaymentWarning(LedgerError):
    """Soft warning: the caller may resubmit with an explicit acknowledgement."""

    status_code = 409


class PersistenceError(LedgerError):
    """Backend error, message passed through verbatim."""

    status_code = 400


def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
