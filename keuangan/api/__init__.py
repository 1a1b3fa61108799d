from dataclasses import dataclass
from typing import Optional

from flask import current_app
from pymongo import MongoClient

from keuangan.assistant import AssistantBridge
from keuangan.repositories.transactions import TransactionRepository

EXTENSION_KEY = "keuangan"


@dataclass
class Services:
    """Dependencies built once by create_app and shared by the blueprints."""
    transactions: TransactionRepository
    assistant: AssistantBridge
    mongo_client: Optional[MongoClient] = None


def services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
