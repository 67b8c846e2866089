from models.users import User
from models.customers import Customer
from models.menu_items import MenuItem
from models.orders import Order, OrderStatus, OrderType
from models.order_items import OrderItem
from models.payments import Payment
from models.expenses import Expense, ExpenseCategory
from models.supply_parties import SupplyParty, PartyPayment

__all__ = ['Customer', 'Expense', 'ExpenseCategory', 'MenuItem', 'Order', 'OrderItem', 'OrderStatus', 'OrderType', 'PartyPayment', 'Payment', 'SupplyParty', 'User',]
