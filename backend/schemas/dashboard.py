from pydantic import BaseModel
from schemas.common import Money

class DashboardStats(BaseModel):
    orders_count: int
    todays_sales: Money
    pending_amount: Money
    todays_expenses: Money
