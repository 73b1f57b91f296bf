"""
In-memory transaction history

Serves the recommendation engine from lists already loaded by the caller
(and from fixtures in tests).
"""
from collections import Counter
from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.models import HistoryEntry, RecurringTransaction, Tag, Target, Transaction


def _recent_first(transactions: Iterable[Transaction]) -> List[Transaction]:
    return sorted(transactions, key=lambda t: t.date or date.min, reverse=True)


class InMemoryTargetSource:
    """TargetSource over an InMemoryHistory for one kind of target"""

    def __init__(self,
                 history: 'InMemoryHistory',
                 targets: Dict[str, Target],
                 assigned: Callable[[Transaction], Sequence[str]]):
        self.history = history
        self.targets = targets
        self.assigned = assigned

    def _targets_of(self, transaction: Transaction) -> Tuple[Target, ...]:
        return tuple(
            self.targets[target_id]
            for target_id in sorted(self.assigned(transaction))
            if target_id in self.targets
        )

    def _entry(self, transaction: Transaction) -> HistoryEntry:
        return HistoryEntry(transaction.id, transaction.label, self._targets_of(transaction))

    def _others(self, user_id: str, exclude_id: Optional[str]) -> List[Transaction]:
        return [
            t for t in _recent_first(self.history.transactions)
            if t.user_id == user_id and (exclude_id is None or t.id != exclude_id)
        ]

    def exact_label(self, user_id, label, exclude_id):
        return [self._entry(t) for t in self._others(user_id, exclude_id) if t.label == label]

    def assigned_window(self, user_id, exclude_id, limit):
        entries = [self._entry(t) for t in self._others(user_id, exclude_id)]
        return [e for e in entries if e.targets][:limit]

    def label_contains(self, user_id, keyword, exclude_id, limit):
        keyword = keyword.upper()
        entries = [
            self._entry(t) for t in self._others(user_id, exclude_id)
            if t.label and keyword in t.label.upper()
        ]
        return [e for e in entries if e.targets][:limit]

    def most_frequent(self, user_id, limit):
        usage = Counter()
        for transaction in self.history.transactions:
            if transaction.user_id != user_id:
                continue
            for target in self._targets_of(transaction):
                usage[target.id] += 1

        ranked = [
            (target, usage[target_id])
            for target_id, target in self.targets.items()
            if target.user_id in (None, user_id)
        ]
        ranked.sort(key=lambda pair: (-pair[1], pair[0].name))
        return ranked[:limit]


class InMemoryHistory:
    """
    A user's transactions, tags and recurring transactions held in memory
    """

    def __init__(self,
                 transactions: Iterable[Transaction],
                 tags: Iterable[Tag] = (),
                 recurring_transactions: Iterable[RecurringTransaction] = ()):
        self.transactions = list(transactions)
        self.tags = {tag.id: tag for tag in tags if tag.id}
        self.recurring_transactions = {rt.id: rt for rt in recurring_transactions if rt.id}

    def get_transaction(self, txn_id: str) -> Optional[Transaction]:
        return next((t for t in self.transactions if t.id == txn_id), None)

    def tag_source(self) -> InMemoryTargetSource:
        return InMemoryTargetSource(self, self.tags, lambda t: t.tag_ids)

    def recurring_source(self) -> InMemoryTargetSource:
        return InMemoryTargetSource(
            self,
            self.recurring_transactions,
            lambda t: [t.recurring_transaction_id] if t.recurring_transaction_id else [],
        )
