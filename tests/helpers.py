"""
Shared test data: one user's tags and recurring transactions, plus a
second user whose data must never leak into suggestions.
"""
from decimal import Decimal

from finance_tracker.core.models import RecurringTransaction, Tag, Transaction

USER = 'user-1'
OTHER_USER = 'user-2'

ELEC = Tag('tag-elec', 'Électricité', USER, '#0d6efd')
FIXED = Tag('tag-fixed', 'Charges fixes', USER, '#6f42c1')
FOOD = Tag('tag-food', 'Courses', USER, '#198754')
SUBS = Tag('tag-subs', 'Abonnements', USER, '#dc3545')
OTHER_TAG = Tag('tag-other', 'Énergie', OTHER_USER, '#ffc107')

RT_EDF = RecurringTransaction('rt-edf', 'EDF', USER)
RT_NETFLIX = RecurringTransaction('rt-netflix', 'Netflix', USER)
RT_RENT = RecurringTransaction('rt-rent', 'Loyer', USER)
RT_OTHER = RecurringTransaction('rt-other', 'EDF', OTHER_USER)


def txn(txn_id, label, amount, day, tags=(), recurring=None, user=USER):
    return Transaction(
        id=txn_id,
        label=label,
        amount=Decimal(amount),
        date=day,
        user_id=user,
        tag_ids=frozenset(tags),
        recurring_transaction_id=recurring,
    )
