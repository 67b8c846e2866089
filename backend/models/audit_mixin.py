from sqlalchemy import Column, DateTime, String

from utils.dates import local_now


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Ledger rows in this system are append-only (payments, supply bills) or
    only ever updated through the payment path (orders), so there is no
    soft-delete counterpart.
    """
    # DateTime(timezone=True) keeps the operator's timezone on PostgreSQL.
    created_at = Column(DateTime(timezone=True), default=local_now)
    updated_at = Column(DateTime(timezone=True), onupdate=local_now)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
