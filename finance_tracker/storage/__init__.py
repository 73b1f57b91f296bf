from .memory import InMemoryHistory
from .postgres import PostgresHistory

__all__ = ['InMemoryHistory', 'PostgresHistory']
