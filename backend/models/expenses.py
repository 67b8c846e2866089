from sqlalchemy import Column, Integer, String, Date, Numeric, Enum
from database import Base
import enum
from models.audit_mixin import TimestampMixin
from utils.dates import local_today

class ExpenseCategory(enum.Enum):
    INGREDIENTS = "Ingredients"
    UTILITIES = "Utilities"
    SALARY = "Salary"
    OTHER = "Other"

class Expense(Base, TimestampMixin):
    __tablename__ = 'expenses'

    id = Column(Integer, primary_key=True, index=True)
    description = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(Enum(ExpenseCategory), default=ExpenseCategory.INGREDIENTS, nullable=False)
    expense_date = Column(Date, nullable=False, default=local_today, index=True)
