from typing import Any

from pydantic import Field

from .base import BaseRelayModel

REQUIRED_FIELDS = ("date", "vendor", "amount", "category")


class ExpenseRecord(BaseRelayModel):
    """Expense submitted by a client, appended as one spreadsheet row.

    Values are taken as sent; only the presence of required fields is checked.
    """

    date: Any = Field(default=None, description="Expense date")
    vendor: Any = Field(default=None, description="Vendor name")
    amount: Any = Field(default=None, description="Amount")
    category: Any = Field(default=None, description="Expense category")
    notes: Any = Field(default="", description="Free-form notes")

    @property
    def missing_fields(self) -> list[str]:
        """Required fields that are absent or falsy (``0`` and ``""`` included)."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]

    def to_row(self) -> list[str]:
        """Return ``[date, vendor, amount, category, notes]`` as strings."""
        return [
            format_cell(self.date),
            format_cell(self.vendor),
            format_cell(self.amount),
            format_cell(self.category),
            format_cell(self.notes) if self.notes else "",
        ]


def format_cell(value: Any) -> str:
    """Render a value the way it was sent, without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
