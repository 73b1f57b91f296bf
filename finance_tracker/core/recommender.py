"""
Recommendation Engine

Suggests tags and recurring transactions for a transaction by combining
the candidate strategies:
1. Identical label (75-95% confidence)
2. Similar label (75-90% confidence)
3. Keyword matching (60-85% confidence)
4. Frequently used targets (25% confidence, fallback)
"""
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Optional

from ..config import Settings, load_settings
from .candidate_finder import CandidateFinder, TargetSource
from .confidence import RECURRING_PROFILE, TAG_PROFILE, ConfidenceProfile, score_candidate
from .merger import merge_recommendations
from .models import Recommendation, Transaction

logger = logging.getLogger(__name__)


def _assigned_tags(transaction: Transaction) -> FrozenSet[str]:
    return frozenset(transaction.tag_ids)


def _assigned_recurring(transaction: Transaction) -> FrozenSet[str]:
    if transaction.recurring_transaction_id:
        return frozenset([transaction.recurring_transaction_id])
    return frozenset()


@dataclass(frozen=True)
class TargetKind:
    """What differs between the tag and recurring transaction pipelines"""
    name: str
    profile: ConfidenceProfile
    keyword_limit: int
    frequent_reason: str
    assigned_ids: Callable[[Transaction], FrozenSet[str]]


TAG_KIND = TargetKind(
    name='tag',
    profile=TAG_PROFILE,
    keyword_limit=30,
    frequent_reason='Tag fréquent ({count} utilisations)',
    assigned_ids=_assigned_tags,
)

RECURRING_KIND = TargetKind(
    name='recurring_transaction',
    profile=RECURRING_PROFILE,
    keyword_limit=10,
    frequent_reason='Transaction fréquente ({count} utilisations)',
    assigned_ids=_assigned_recurring,
)


class Recommender:
    """
    Recommends targets of one kind for transactions
    """

    def __init__(self,
                 source: TargetSource,
                 kind: TargetKind,
                 settings: Optional[Settings] = None):
        """
        Args:
            source: Read access to the user's history for this kind
            kind: TAG_KIND or RECURRING_KIND
            settings: Engine settings (default: loaded from environment)
        """
        self.kind = kind
        self.settings = settings or load_settings()
        self.finder = CandidateFinder(
            source,
            kind.profile,
            keyword_limit=kind.keyword_limit,
            fuzzy_window=self.settings.fuzzy_window,
        )

    def recommend(self, transaction: Transaction,
                  limit: Optional[int] = None) -> List[Recommendation]:
        """
        Recommend targets for a transaction.

        Args:
            transaction: The transaction to analyse
            limit: Maximum number of recommendations (default from settings)

        Returns:
            Recommendations sorted by decreasing confidence, never including
            a target already assigned to the transaction
        """
        if limit is None:
            limit = self.settings.recommendation_limit
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        if not transaction.user_id or limit == 0:
            return []

        assigned = self.kind.assigned_ids(transaction)
        candidates = self.finder.find_all(transaction, limit, exclude_ids=sorted(assigned))

        scored = [
            score_candidate(candidate, self.kind.profile, self.kind.frequent_reason)
            for candidate in candidates
        ]
        recommendations = merge_recommendations(scored, exclude_ids=assigned, limit=limit)

        logger.info(
            "%d %s recommendations for transaction %s (%d candidates)",
            len(recommendations), self.kind.name, transaction.id, len(candidates),
        )
        return recommendations


def tag_recommender(source: TargetSource, settings: Optional[Settings] = None) -> Recommender:
    return Recommender(source, TAG_KIND, settings)


def recurring_recommender(source: TargetSource,
                          settings: Optional[Settings] = None) -> Recommender:
    return Recommender(source, RECURRING_KIND, settings)
