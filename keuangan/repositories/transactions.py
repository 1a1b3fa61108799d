from typing import Any, Dict, List, Mapping, Optional

from pymongo import ASCENDING
from pymongo.database import Database

from keuangan.analytics import to_transactions
from keuangan.logging_setup import get_logger
from keuangan.models import Transaction
from keuangan.repositories.base import MongoRepository

logger = get_logger(__name__)


class TransactionRepository(MongoRepository):
    def __init__(self, db: Database):
        super().__init__(db, "transactions")

    def list(self) -> List[Dict[str, Any]]:
        """Semua transaksi, urut tanggal (tanpa paging/filter)"""
        docs = self.find_many({}, sort=[("date", ASCENDING)])
        logger.debug("loaded %d transactions", len(docs))
        return docs

    def list_transactions(self) -> List[Transaction]:
        """Same as list(), validated into Transaction objects."""
        return to_transactions(self.list())

    def get(self, transaction_id: str) -> Optional[Dict[str, Any]]:
        return self.find_by_id(transaction_id)

    def create(self, body: Mapping[str, Any]) -> str:
        """Validate a request body and store it; returns the new id."""
        txn = Transaction.from_document(body)
        _id = self.insert_one(txn.to_document())
        logger.info("created %s transaction %s", txn.type or "untyped", _id)
        return _id

    def delete(self, transaction_id: str) -> bool:
        return self.delete_by_id(transaction_id)
