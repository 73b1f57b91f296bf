"""
Recommendation engine

Suggests tags and recurring transactions for a transaction from the
user's history.
"""

# Expose main classes for easy imports
from .label_normalizer import normalize_label
from .keyword_extractor import extract_keywords
from .similarity import label_similarity
from .models import (
    HistoryEntry,
    Recommendation,
    RecurringTransaction,
    Tag,
    Transaction,
)
from .recommender import Recommender, recurring_recommender, tag_recommender

__all__ = [
    'normalize_label',
    'extract_keywords',
    'label_similarity',
    'HistoryEntry',
    'Recommendation',
    'RecurringTransaction',
    'Tag',
    'Transaction',
    'Recommender',
    'recurring_recommender',
    'tag_recommender',
]
