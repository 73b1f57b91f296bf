import pytest

from finance_tracker.core.candidate_finder import CandidateFinder
from finance_tracker.core.confidence import (
    RECURRING_PROFILE,
    STRATEGY_FREQUENCY,
    TAG_PROFILE,
    score_candidate,
)
from finance_tracker.core.models import HistoryEntry, Tag

from tests.helpers import ELEC, FIXED, FOOD, RT_EDF, RT_NETFLIX, SUBS


def by_target(candidates):
    return {c.target.id: c for c in candidates}


@pytest.fixture
def tag_finder(history):
    return CandidateFinder(history.tag_source(), TAG_PROFILE, keyword_limit=30)


@pytest.fixture
def recurring_finder(history):
    return CandidateFinder(history.recurring_source(), RECURRING_PROFILE, keyword_limit=10)


def test_exact_label_counts_every_transaction_with_the_label(tag_finder, subject):
    candidates = by_target(tag_finder.find_by_exact_label(subject('EDF ENERGIE')))

    assert set(candidates) == {ELEC.id, FIXED.id}
    assert candidates[ELEC.id].match_count == 3
    assert candidates[ELEC.id].total_with_label == 4
    assert score_candidate(candidates[ELEC.id], TAG_PROFILE).confidence == 90.0
    assert score_candidate(candidates[FIXED.id], TAG_PROFILE).confidence == 80.0


def test_exact_label_is_case_sensitive(tag_finder, subject):
    assert tag_finder.find_by_exact_label(subject('edf energie')) == []


def test_fuzzy_label_finds_near_identical_labels(tag_finder, recurring_finder, subject):
    transaction = subject('NETFLIX.COM PARIS')

    [tag_candidate] = tag_finder.find_by_fuzzy_label(transaction)
    assert tag_candidate.target == SUBS
    assert tag_candidate.similarity == pytest.approx(94.12, abs=0.01)
    assert score_candidate(tag_candidate, TAG_PROFILE).confidence == 85.0

    [rt_candidate] = recurring_finder.find_by_fuzzy_label(transaction)
    assert rt_candidate.target == RT_NETFLIX
    assert score_candidate(rt_candidate, RECURRING_PROFILE).confidence == 80.0


def test_fuzzy_label_ignores_exact_matches(tag_finder, subject):
    assert tag_finder.find_by_fuzzy_label(subject('EDF ENERGIE')) == []


def test_fuzzy_window_limits_scanned_transactions(history, subject):
    finder = CandidateFinder(history.tag_source(), TAG_PROFILE, keyword_limit=30, fuzzy_window=1)
    # Only the most recent assigned transaction (CARREFOUR MARKET) is compared
    assert finder.find_by_fuzzy_label(subject('NETFLIX.COM PARIS')) == []
    assert [c.target for c in finder.find_by_fuzzy_label(subject('CARREFOUR MARKETS'))] == [FOOD]


def test_keyword_exact_name_is_strong(recurring_finder, subject):
    [candidate] = recurring_finder.find_by_keywords(subject('PRLV EDF FACTURE'))

    assert candidate.target == RT_EDF
    assert candidate.keyword == 'EDF'
    assert score_candidate(candidate, RECURRING_PROFILE).confidence == 80.0


def test_keyword_keeps_strongest_keyword_per_target(history, subject):
    finder = CandidateFinder(history.recurring_source(), RECURRING_PROFILE, keyword_limit=10)
    [candidate] = finder.find_by_keywords(subject('ENERGIE EDF'))
    assert candidate.keyword == 'EDF'


def test_other_users_are_never_candidates(tag_finder, recurring_finder, subject):
    transaction = subject('EDF ENERGIE')
    found = (
        tag_finder.find_by_exact_label(transaction)
        + tag_finder.find_by_keywords(transaction)
        + tag_finder.find_most_frequent(transaction, 10)
        + recurring_finder.find_by_exact_label(transaction)
        + recurring_finder.find_by_keywords(transaction)
    )
    assert all(c.target.user_id == 'user-1' for c in found)


@pytest.mark.parametrize("label", [None, ''])
def test_label_strategies_need_a_label(tag_finder, subject, label):
    transaction = subject(label)
    assert tag_finder.find_by_exact_label(transaction) == []
    assert tag_finder.find_by_fuzzy_label(transaction) == []
    assert tag_finder.find_by_keywords(transaction) == []


def test_most_frequent(tag_finder, subject):
    candidates = tag_finder.find_most_frequent(subject(''), 3)

    assert [(c.target.id, c.usage_count) for c in candidates] == [
        (ELEC.id, 3), (FIXED.id, 2), (FOOD.id, 2),
    ]
    assert all(c.strategy == STRATEGY_FREQUENCY for c in candidates)


def test_frequency_only_when_too_few_candidates(tag_finder, subject):
    strategies = {c.strategy for c in tag_finder.find_all(subject('EDF ENERGIE'), limit=2)}
    assert STRATEGY_FREQUENCY not in strategies

    strategies = {c.strategy for c in tag_finder.find_all(subject('EDF ENERGIE'), limit=5)}
    assert STRATEGY_FREQUENCY in strategies


class UnsavedTargetSource:
    """Returns a target that was never saved next to a saved one"""

    def exact_label(self, user_id, label, exclude_id):
        return [HistoryEntry('h1', label, (Tag(None, 'Brouillon'), ELEC))]

    def assigned_window(self, user_id, exclude_id, limit):
        return []

    def label_contains(self, user_id, keyword, exclude_id, limit):
        return []

    def most_frequent(self, user_id, limit):
        return [(Tag(None, 'Brouillon'), 4), (ELEC, 0)]


def test_unsaved_targets_and_unused_targets_are_skipped(subject):
    finder = CandidateFinder(UnsavedTargetSource(), TAG_PROFILE, keyword_limit=30)
    transaction = subject('EDF ENERGIE')

    assert [c.target for c in finder.find_by_exact_label(transaction)] == [ELEC]
    assert finder.find_most_frequent(transaction, 5) == []


class LargeHistorySource:
    """1000 assigned transactions, each with its own tag"""

    def __init__(self):
        self.window_limits = []

    def exact_label(self, user_id, label, exclude_id):
        return []

    def assigned_window(self, user_id, exclude_id, limit):
        self.window_limits.append(limit)
        return [
            HistoryEntry(f't{i}', 'EDF ENERGIES', (Tag(f'tag-{i}', f'Tag {i}', user_id),))
            for i in range(1000)
        ]

    def label_contains(self, user_id, keyword, exclude_id, limit):
        return []

    def most_frequent(self, user_id, limit):
        return []


def test_fuzzy_window_is_capped(subject):
    source = LargeHistorySource()
    finder = CandidateFinder(source, TAG_PROFILE, keyword_limit=30, fuzzy_window=100000)

    candidates = finder.find_by_fuzzy_label(subject('EDF ENERGIE'))

    assert finder.fuzzy_window == 200
    assert source.window_limits == [200]
    assert len(candidates) == 200
