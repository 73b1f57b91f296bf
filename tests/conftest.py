"""
Shared fixtures: a small history built from the test data in helpers.
"""
from datetime import date

import pytest

from finance_tracker.config import Settings
from finance_tracker.storage.memory import InMemoryHistory

from tests.helpers import (
    ELEC,
    FIXED,
    FOOD,
    OTHER_TAG,
    OTHER_USER,
    RT_EDF,
    RT_NETFLIX,
    RT_OTHER,
    RT_RENT,
    SUBS,
    USER,
    txn,
)


@pytest.fixture
def history():
    transactions = [
        txn('h1', 'EDF ENERGIE', '-50.00', date(2024, 1, 5), [ELEC.id], RT_EDF.id),
        txn('h2', 'EDF ENERGIE', '-52.00', date(2024, 2, 5), [ELEC.id], RT_EDF.id),
        txn('h3', 'EDF ENERGIE', '-49.00', date(2024, 3, 5), [ELEC.id, FIXED.id], RT_EDF.id),
        txn('h4', 'EDF ENERGIE', '-51.00', date(2024, 4, 5)),
        txn('h5', 'NETFLIX COM PARIS', '-13.49', date(2024, 3, 10), [SUBS.id], RT_NETFLIX.id),
        txn('h6', 'CARREFOUR MARKET', '-45.00', date(2024, 3, 12), [FOOD.id]),
        txn('h7', 'CARREFOUR MARKET', '-30.00', date(2024, 3, 19), [FOOD.id]),
        txn('h8', 'LOYER MARS', '-800.00', date(2024, 3, 1), [FIXED.id], RT_RENT.id),
        txn('o1', 'EDF ENERGIE', '-60.00', date(2024, 3, 5), [OTHER_TAG.id], RT_OTHER.id,
            user=OTHER_USER),
    ]
    return InMemoryHistory(
        transactions,
        tags=[ELEC, FIXED, FOOD, SUBS, OTHER_TAG],
        recurring_transactions=[RT_EDF, RT_NETFLIX, RT_RENT, RT_OTHER],
    )


@pytest.fixture
def settings():
    return Settings(recommendation_limit=5, fuzzy_window=200)


@pytest.fixture
def subject():
    """Build a new (unsaved history) transaction to get suggestions for"""
    def build(label, tags=(), recurring=None, user=USER):
        return txn('txn-new', label, '-50.00', date(2024, 5, 5), tags, recurring, user)
    return build
