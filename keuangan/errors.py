"""
Error classes shared by the store, the aggregator and the assistant.

Every error carries a ``status_code`` so the Flask error handlers in
``app.py`` can turn it into a ``{"error": message}`` response.
"""

from typing import Optional


class KeuanganError(Exception):
    """Base exception for the dashboard backend"""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class TransactionValidationError(KeuanganError, ValueError):
    """A transaction document is missing a field or carries a malformed one"""
    status_code = 422


class StoreError(KeuanganError):
    """The document store could not be reached or rejected the operation"""
    pass


class AssistantError(KeuanganError):
    """The text-completion service failed"""
    pass
