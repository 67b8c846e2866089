from .money import format_currency
from .dates import local_now, local_today

__all__ = ['format_currency', 'local_now', 'local_today']
