"""
Confidence Calculator

Turns the raw evidence gathered by each matching strategy into a bounded
confidence score (0-100) and a reason shown next to the suggestion.
"""
from dataclasses import dataclass
from typing import Optional

from .models import Target
from .similarity import SIMILARITY_HIGH, SIMILARITY_MEDIUM

STRATEGY_EXACT_LABEL = 'exact_label'
STRATEGY_FUZZY_LABEL = 'fuzzy_label'
STRATEGY_KEYWORD = 'keyword'
STRATEGY_FREQUENCY = 'frequency'

# (minimum probability %, confidence) for identical labels
EXACT_LABEL_BANDS = [
    (90.0, 95.0),
    (75.0, 90.0),
    (50.0, 85.0),
    (25.0, 80.0),
]
EXACT_LABEL_FLOOR = 75.0

MIN_CONFIDENCE = 0.0
MAX_CONFIDENCE = 100.0


@dataclass(frozen=True)
class ConfidenceProfile:
    """Confidence constants for one kind of target"""
    fuzzy_high: float
    fuzzy_medium: float
    fuzzy_low: float
    keyword_strong: float
    keyword_medium: float = 70.0
    keyword_weak: float = 60.0
    frequent: float = 25.0


TAG_PROFILE = ConfidenceProfile(
    fuzzy_high=90.0,
    fuzzy_medium=85.0,
    fuzzy_low=80.0,
    keyword_strong=85.0,
)

RECURRING_PROFILE = ConfidenceProfile(
    fuzzy_high=85.0,
    fuzzy_medium=80.0,
    fuzzy_low=75.0,
    keyword_strong=80.0,
)


@dataclass(frozen=True)
class Candidate:
    """
    A target found by one strategy, with the evidence for it.

    Only the evidence fields relevant to the strategy are set:
    - exact_label: match_count, total_with_label
    - fuzzy_label: similarity
    - keyword: keyword
    - frequency: usage_count
    """
    target: Target
    strategy: str
    match_count: int = 0
    total_with_label: int = 0
    similarity: float = 0.0
    keyword: Optional[str] = None
    usage_count: int = 0


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate with its confidence and reason"""
    target: Target
    strategy: str
    confidence: float
    reason: str


def clamp_confidence(value: float) -> float:
    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, value))


def exact_label_confidence(match_count: int, total_with_label: int) -> float:
    """Band the share of identical labels that carry the target"""
    if total_with_label <= 0:
        return EXACT_LABEL_FLOOR

    probability = match_count / total_with_label * 100
    for threshold, confidence in EXACT_LABEL_BANDS:
        if probability >= threshold:
            return confidence
    return EXACT_LABEL_FLOOR


def fuzzy_label_confidence(similarity: float, profile: ConfidenceProfile) -> float:
    if similarity >= SIMILARITY_HIGH:
        return profile.fuzzy_high
    if similarity >= SIMILARITY_MEDIUM:
        return profile.fuzzy_medium
    return profile.fuzzy_low


def keyword_confidence(keyword: str, target_name: str, profile: ConfidenceProfile) -> float:
    """
    Compare a keyword with the target name.

    Identical -> strong, one contains the other -> medium, else weak.
    """
    keyword_upper = keyword.upper()
    name_upper = (target_name or '').upper()

    if name_upper == keyword_upper:
        return profile.keyword_strong
    if name_upper and (keyword_upper in name_upper or name_upper in keyword_upper):
        return profile.keyword_medium
    return profile.keyword_weak


def score_candidate(candidate: Candidate,
                    profile: ConfidenceProfile,
                    frequent_reason: str = 'Utilisation fréquente ({count} utilisations)') -> ScoredCandidate:
    """
    Compute confidence and reason for a candidate.

    Args:
        candidate: Candidate produced by a strategy
        profile: Confidence constants of the target kind
        frequent_reason: Reason template for the frequency strategy

    Returns:
        ScoredCandidate with a confidence clamped to 0-100
    """
    strategy = candidate.strategy

    if strategy == STRATEGY_EXACT_LABEL:
        confidence = exact_label_confidence(candidate.match_count, candidate.total_with_label)
        probability = (candidate.match_count / candidate.total_with_label * 100
                       if candidate.total_with_label else 0.0)
        reason = (f"Label identique ({candidate.match_count}/{candidate.total_with_label} "
                  f"occurrences, {probability:.0f}%)")
    elif strategy == STRATEGY_FUZZY_LABEL:
        confidence = fuzzy_label_confidence(candidate.similarity, profile)
        reason = f"Label similaire ({candidate.similarity:.0f}%)"
    elif strategy == STRATEGY_KEYWORD:
        confidence = keyword_confidence(candidate.keyword or '', candidate.target.name, profile)
        reason = f'Mot-clé : "{candidate.keyword}"'
    elif strategy == STRATEGY_FREQUENCY:
        confidence = profile.frequent
        reason = frequent_reason.format(count=candidate.usage_count)
    else:
        raise ValueError(f"Unknown strategy: {strategy}")

    return ScoredCandidate(
        target=candidate.target,
        strategy=strategy,
        confidence=clamp_confidence(confidence),
        reason=reason,
    )
