from fastapi import HTTPException, status


class LedgerValidationError(ValueError):
    """Bad user input. Surfaced to the operator as-is; nothing was written."""


class RecordNotFoundError(LookupError):
    pass


class PersistenceError(RuntimeError):
    """The database rejected a write. The transaction has been rolled back."""


class LedgerInconsistencyError(PersistenceError):
    """A cached aggregate no longer matches the event log it summarises."""


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a ledger error onto the HTTP status the console expects."""
    if isinstance(exc, LedgerValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


LEDGER_ERRORS = (LedgerValidationError, RecordNotFoundError, PersistenceError)
