"""
Data models for the receipt relay.
"""

from .base import BaseRelayModel
from .expense import ExpenseRecord
from .token import TokenSet

__all__ = [
    "BaseRelayModel",
    "ExpenseRecord",
    "TokenSet",
]
