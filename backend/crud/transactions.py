from contextlib import contextmanager
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from utils.errors import PersistenceError

logger = logging.getLogger("transactions")


@contextmanager
def write_transaction(db: Session, action: str):
    """Run the block as one unit of work: commit at the end, roll back on any error.

    Database failures surface as PersistenceError with a generic message;
    validation and lookup errors propagate unchanged after the rollback.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database error while trying to {action}: {e}", exc_info=True)
        raise PersistenceError(f"Could not {action}. Please try again.") from e
    except Exception:
        db.rollback()
        raise
