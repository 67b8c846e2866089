from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin
from utils.dates import local_today

class SupplyParty(Base, TimestampMixin):
    """One supply bill. Bills sharing a party_name belong to the same supplier."""
    __tablename__ = "parties"

    id = Column(Integer, primary_key=True, index=True)
    party_name = Column(String, nullable=False, index=True)
    supply_date = Column(Date, nullable=False, default=local_today)
    total_amount = Column(Numeric(10, 2), nullable=False)
    details = Column(Text, nullable=True)

    # Relationships
    payments = relationship("PartyPayment", back_populates="party", order_by="PartyPayment.id")

class PartyPayment(Base, TimestampMixin):
    __tablename__ = "party_payments"

    id = Column(Integer, primary_key=True, index=True)
    # Filed against one bill, but counts towards the whole named supplier
    party_id = Column(Integer, ForeignKey("parties.id"), nullable=False, index=True)
    payment_date = Column(Date, nullable=False, default=local_today)
    amount_paid = Column(Numeric(10, 2), nullable=False)
    note = Column(Text, nullable=True)

    # Relationships
    party = relationship("SupplyParty", back_populates="payments")
