"""
Recommendation Merger

Several strategies often point at the same target. Their suggestions are
grouped per target, the best confidence is kept with a small bonus when
independent strategies agree, and the list is ranked and truncated.
"""
import logging
from collections import OrderedDict
from typing import Iterable, List, Set

from .confidence import MAX_CONFIDENCE, ScoredCandidate
from .models import Recommendation

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
MAX_REASONS = 2
REASON_SEPARATOR = ' + '


def source_bonus(strategy_count: int) -> float:
    """Bonus for a target suggested by several distinct strategies"""
    if strategy_count >= 3:
        return 3.0
    if strategy_count == 2:
        return 2.0
    return 0.0


def combine_reasons(reasons: List[str]) -> str:
    """Join the first two distinct reasons, counting the rest"""
    distinct = list(OrderedDict.fromkeys(reasons))
    combined = REASON_SEPARATOR.join(distinct[:MAX_REASONS])
    extra = len(distinct) - MAX_REASONS
    if extra > 0:
        combined += f" (+{extra} autres)"
    return combined


def merge_recommendations(scored: Iterable[ScoredCandidate],
                          exclude_ids: Set[str] = frozenset(),
                          limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
    """
    Merge scored candidates into a ranked recommendation list.

    Args:
        scored: Scored candidates from all strategies
        exclude_ids: Ids of targets already assigned to the transaction
        limit: Maximum number of recommendations

    Returns:
        Recommendations sorted by confidence (highest first)
    """
    groups = OrderedDict()
    for candidate in scored:
        target_id = candidate.target.id
        if not target_id:
            logger.debug("Skipping candidate without id: %s", candidate.target.name)
            continue
        groups.setdefault(target_id, []).append(candidate)

    recommendations = []
    for target_id, group in groups.items():
        if target_id in exclude_ids:
            continue

        # Strongest evidence first so its reason leads
        group = sorted(group, key=lambda c: c.confidence, reverse=True)
        strategies = {c.strategy for c in group}
        confidence = min(MAX_CONFIDENCE, group[0].confidence + source_bonus(len(strategies)))

        recommendations.append(Recommendation(
            target=group[0].target,
            confidence=confidence,
            reason=combine_reasons([c.reason for c in group]),
        ))

    recommendations.sort(key=lambda r: r.confidence, reverse=True)
    return recommendations[:max(limit, 0)]
