"""
Domain models

Plain dataclasses for the records the recommendation engine reads.
Relations are held as identifier sets (tag_ids, recurring_transaction_id);
the storage layer resolves them into Tag / RecurringTransaction objects.
"""
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, FrozenSet, Optional, Tuple, Union

from .palette import pick_tag_color


def budget_month_for(day: Optional[date]) -> Optional[str]:
    """Return the YYYY-MM budget month of a date (None if no date)"""
    if day is None:
        return None
    return day.strftime('%Y-%m')


@dataclass(frozen=True)
class Tag:
    """User-defined label attached to any number of transactions"""
    id: Optional[str]
    name: str
    user_id: Optional[str] = None
    color: Optional[str] = None

    def with_color(self, color: Optional[str] = None) -> 'Tag':
        """
        Return this tag with a colour filled in.

        Keeps an existing colour; otherwise uses `color` or a random pick
        from the palette.
        """
        if self.color:
            return self
        if color is None:
            color = pick_tag_color()
        return replace(self, color=color)


@dataclass(frozen=True)
class RecurringTransaction:
    """Grouping for transactions that repeat (rent, salary, subscriptions)"""
    id: Optional[str]
    name: str
    user_id: Optional[str] = None


Target = Union[Tag, RecurringTransaction]


@dataclass
class Transaction:
    """A bank transaction as imported from a statement"""
    id: Optional[str]
    label: Optional[str]
    amount: Decimal
    date: Optional[date]
    user_id: Optional[str]
    tag_ids: FrozenSet[str] = field(default_factory=frozenset)
    recurring_transaction_id: Optional[str] = None
    budget_month: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            self.amount = Decimal(str(self.amount))
        self.tag_ids = frozenset(self.tag_ids)
        if self.budget_month is None:
            self.budget_month = budget_month_for(self.date)


@dataclass(frozen=True)
class HistoryEntry:
    """One historical transaction with the targets assigned to it"""
    transaction_id: Optional[str]
    label: Optional[str]
    targets: Tuple[Target, ...] = ()


@dataclass(frozen=True)
class Recommendation:
    """A suggested target for a transaction (never persisted)"""
    target: Target
    confidence: float
    reason: str = ''

    @property
    def target_id(self) -> Optional[str]:
        return self.target.id

    @property
    def target_display_name(self) -> str:
        return self.target.name

    @property
    def confidence_percentage(self) -> int:
        """Confidence rounded for display"""
        return int(round(self.confidence))

    def to_dict(self) -> Dict:
        return {
            'target_id': self.target_id,
            'target_display_name': self.target_display_name,
            'confidence': self.confidence,
            'reason': self.reason,
        }
