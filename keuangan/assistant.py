"""Assistant bridge: transactions + a user question -> Gemini answer.

The bridge does one store read, builds one prompt and makes one completion
call per question. Failures are not retried; they surface as
``StoreError`` / ``AssistantError`` to the request handler.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Protocol

from google import genai

from .errors import AssistantError
from .logging_setup import get_logger
from .models import Transaction

logger = get_logger(__name__)

DEFAULT_MODEL = "gemini-2.0-flash"
PING_PROMPT = "Halo, apa kabar?"

PROMPT_TEMPLATE = """
You are a financial assistant AI. Answer the user's question based on their transaction data.
Here is the user's transaction data in JSON format:
{data}

User's question: {message}

Provide a helpful, concise response in {language} language.
"""


class CompletionClient(Protocol):
    def generate(self, prompt: str) -> str:
        ...


class TransactionSource(Protocol):
    def list_transactions(self) -> List[Transaction]:
        ...


def format_transactions(txns: Iterable[Transaction]) -> List[Dict[str, Any]]:
    """Prompt-friendly records; dates reduced to YYYY-MM-DD."""
    return [
        {
            "type": t.type,
            "amount": t.amount,
            "category": t.category,
            "date": t.date.isoformat(),
            "note": t.note,
        }
        for t in txns
    ]


def build_prompt(records: List[Dict[str, Any]], message: str, language: str = "Indonesian") -> str:
    data = json.dumps(records, indent=2, ensure_ascii=False)
    return PROMPT_TEMPLATE.format(data=data, message=message, language=language)


class GeminiClient:
    """Thin wrapper around the google-genai client."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_MODEL):
        if not api_key:
            raise AssistantError("GOOGLE_GEMINI_API_KEY is not set")
        self.model_name = model_name
        self.client = genai.Client(api_key=api_key)

    def generate(self, prompt: str) -> str:
        try:
            response = self.client.models.generate_content(model=self.model_name, contents=prompt)
            return response.text
        except Exception as e:  # noqa: BLE001
            logger.error("Gemini call failed (%s): %s", self.model_name, e)
            raise AssistantError(str(e)) from e


class AssistantBridge:
    def __init__(self, store: TransactionSource, client: Optional[CompletionClient], language: str = "Indonesian"):
        self.store = store
        self.client = client
        self.language = language

    def _generate(self, prompt: str) -> str:
        if self.client is None:
            raise AssistantError("GOOGLE_GEMINI_API_KEY is not set")
        return self.client.generate(prompt)

    def answer(self, message: str) -> str:
        records = format_transactions(self.store.list_transactions())
        prompt = build_prompt(records, message, self.language)
        logger.info("asking assistant about %d transactions", len(records))
        return self._generate(prompt)

    def ping(self) -> str:
        logger.info("testing Gemini API")
        text = self._generate(PING_PROMPT)
        logger.debug("Gemini response: %s", text)
        return text
