"""Shared fixtures: an in-memory store, a stub Gemini client and a Flask app."""

from __future__ import annotations

import pytest

from app import create_app
from config import Settings
from keuangan.repositories.transactions import TransactionRepository
from tests.helpers.gemini_stub import CompletionStub
from tests.helpers.mongo_stub import FakeDatabase


@pytest.fixture
def scenario_docs():
    return [
        {"type": "income", "amount": 1000, "date": "2024-01-05"},
        {"type": "expense", "amount": 300, "category": "food", "date": "2024-01-10"},
        {"type": "expense", "amount": 200, "category": "food", "date": "2024-02-01"},
    ]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def store(fake_db: FakeDatabase) -> TransactionRepository:
    return TransactionRepository(fake_db)


@pytest.fixture
def completion() -> CompletionStub:
    return CompletionStub()


@pytest.fixture
def app(store, completion):
    app = create_app(Settings(), store=store, completion=completion)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
