from database import Base
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from models.audit_mixin import TimestampMixin

class User(Base, TimestampMixin):
    """A console operator. Usernames end up in created_by/updated_by on ledger rows."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, last_login_at={self.last_login_at})>"
