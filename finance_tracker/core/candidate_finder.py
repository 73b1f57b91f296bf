"""
Candidate Finder

Searches the user's transaction history for targets (tags or recurring
transactions) that may fit a transaction, using four strategies:
1. Identical label
2. Similar label (Levenshtein)
3. Shared keywords
4. Most used targets (fallback)

The history is read through a TargetSource, so the same finder serves
both kinds of targets.
"""
import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from .confidence import (
    STRATEGY_EXACT_LABEL,
    STRATEGY_FREQUENCY,
    STRATEGY_FUZZY_LABEL,
    STRATEGY_KEYWORD,
    Candidate,
    ConfidenceProfile,
    keyword_confidence,
)
from .keyword_extractor import extract_keywords
from .label_normalizer import normalize_label
from .models import HistoryEntry, Target, Transaction
from .similarity import is_fuzzy_match, label_similarity

logger = logging.getLogger(__name__)

DEFAULT_FUZZY_WINDOW = 200


class TargetSource(Protocol):
    """Read-only access to one user's history for one kind of target"""

    def exact_label(self, user_id: str, label: str,
                    exclude_id: Optional[str]) -> List[HistoryEntry]:
        """All transactions with this exact label, with or without targets"""
        ...

    def assigned_window(self, user_id: str, exclude_id: Optional[str],
                        limit: int) -> List[HistoryEntry]:
        """Most recent transactions having at least one target"""
        ...

    def label_contains(self, user_id: str, keyword: str, exclude_id: Optional[str],
                       limit: int) -> List[HistoryEntry]:
        """Transactions with a target whose uppercased label contains keyword"""
        ...

    def most_frequent(self, user_id: str, limit: int) -> List[Tuple[Target, int]]:
        """Targets ordered by number of linked transactions"""
        ...


def _has_id(target: Target) -> bool:
    if not target.id:
        logger.debug("Ignoring unsaved target %r", target.name)
        return False
    return True


class CandidateFinder:
    """
    Runs the matching strategies against a TargetSource
    """

    def __init__(self,
                 source: TargetSource,
                 profile: ConfidenceProfile,
                 keyword_limit: int,
                 fuzzy_window: int = DEFAULT_FUZZY_WINDOW):
        """
        Args:
            source: History access for the target kind
            profile: Confidence constants, used to keep the best keyword per target
            keyword_limit: Max transactions fetched per keyword
            fuzzy_window: Max transactions compared by the fuzzy strategy
                (never more than DEFAULT_FUZZY_WINDOW)
        """
        self.source = source
        self.profile = profile
        self.keyword_limit = keyword_limit
        self.fuzzy_window = min(fuzzy_window, DEFAULT_FUZZY_WINDOW)

    def find_by_exact_label(self, transaction: Transaction) -> List[Candidate]:
        """Targets of other transactions carrying the very same label"""
        label = transaction.label
        if not label:
            return []

        entries = self.source.exact_label(transaction.user_id, label, transaction.id)
        total_with_label = len(entries)

        counts: Dict[str, Tuple[Target, int]] = OrderedDict()
        for entry in entries:
            for target in entry.targets:
                if not _has_id(target):
                    continue
                _, count = counts.get(target.id, (target, 0))
                counts[target.id] = (target, count + 1)

        return [
            Candidate(
                target=target,
                strategy=STRATEGY_EXACT_LABEL,
                match_count=count,
                total_with_label=total_with_label,
            )
            for target, count in counts.values()
        ]

    def find_by_fuzzy_label(self, transaction: Transaction) -> List[Candidate]:
        """Targets of recent transactions whose label is nearly identical"""
        subject = normalize_label(transaction.label)
        if not subject:
            return []

        entries = self.source.assigned_window(
            transaction.user_id, transaction.id, self.fuzzy_window
        )

        best: Dict[str, Tuple[Target, float]] = OrderedDict()
        for entry in entries[:self.fuzzy_window]:
            other = normalize_label(entry.label)
            if not other:
                continue
            similarity = label_similarity(subject, other)
            if not is_fuzzy_match(similarity):
                continue
            for target in entry.targets:
                if not _has_id(target):
                    continue
                if target.id not in best or best[target.id][1] < similarity:
                    best[target.id] = (target, similarity)

        return [
            Candidate(target=target, strategy=STRATEGY_FUZZY_LABEL, similarity=similarity)
            for target, similarity in best.values()
        ]

    def find_by_keywords(self, transaction: Transaction) -> List[Candidate]:
        """Targets of transactions sharing a keyword with the label"""
        keywords = sorted(extract_keywords(transaction.label))
        if not keywords:
            return []

        best: Dict[str, Tuple[Target, str, float]] = OrderedDict()
        for keyword in keywords:
            entries = self.source.label_contains(
                transaction.user_id, keyword, transaction.id, self.keyword_limit
            )
            for entry in entries:
                for target in entry.targets:
                    if not _has_id(target):
                        continue
                    confidence = keyword_confidence(keyword, target.name, self.profile)
                    if target.id not in best or best[target.id][2] < confidence:
                        best[target.id] = (target, keyword, confidence)

        return [
            Candidate(target=target, strategy=STRATEGY_KEYWORD, keyword=keyword)
            for target, keyword, _ in best.values()
        ]

    def find_most_frequent(self, transaction: Transaction, limit: int) -> List[Candidate]:
        """The user's most used targets, regardless of the label"""
        if limit <= 0:
            return []

        return [
            Candidate(target=target, strategy=STRATEGY_FREQUENCY, usage_count=count)
            for target, count in self.source.most_frequent(transaction.user_id, limit)
            if count > 0 and _has_id(target)
        ]

    def find_all(self, transaction: Transaction, limit: int,
                 exclude_ids: Sequence[str] = ()) -> List[Candidate]:
        """
        Run all strategies for a transaction.

        The frequency fallback only runs when the label-based strategies
        found fewer than `limit` candidates. It asks for enough targets to
        still fill the list once already assigned ones are excluded.
        """
        candidates = []
        candidates.extend(self.find_by_exact_label(transaction))
        candidates.extend(self.find_by_fuzzy_label(transaction))
        candidates.extend(self.find_by_keywords(transaction))

        logger.debug(
            "Label strategies found %d candidates for transaction %s",
            len(candidates), transaction.id,
        )

        if len(candidates) < limit:
            candidates.extend(self.find_most_frequent(transaction, limit + len(exclude_ids)))

        return candidates
