"""Document store exceptions."""

from __future__ import annotations


class StoreError(Exception):
    """Raised when the document store rejects or cannot perform an operation.

    The message is the driver's own error text.
    """
