from .base import MongoRepository
from .transactions import TransactionRepository

__all__ = [
    'MongoRepository',
    'TransactionRepository',
]
