import pytest

from finance_tracker.core.keyword_extractor import extract_keywords, is_keyword


def test_banking_jargon_removed():
    assert extract_keywords("PRLV SEPA EDF ENERGIE") == {"SEPA", "EDF", "ENERGIE"}


def test_dates_and_numbers_removed():
    assert extract_keywords("CARTE 12/03 NETFLIX.COM PARIS") == {"NETFLIX.COM", "PARIS"}


def test_reference_codes_removed():
    assert extract_keywords("VIR INST FR76AB1234 LOYER") == {"LOYER"}


def test_stop_words_and_legal_forms_removed():
    assert extract_keywords("Paiement par carte S.A.R.L. Dupont") == {"PAIEMENT", "DUPONT"}


def test_short_tokens_removed():
    assert extract_keywords("EDF SA X1") == {"EDF"}


def test_split_on_separators():
    assert extract_keywords("uber-eats_paris/fr") == {"UBER", "EATS", "PARIS"}


def test_keywords_are_unique():
    assert extract_keywords("EDF edf EDF") == {"EDF"}


@pytest.mark.parametrize("label", [None, "", "CARTE VIR 12/03"])
def test_no_keywords(label):
    assert extract_keywords(label) == set()


@pytest.mark.parametrize("token, expected", [
    ("12/03/2024", False),
    ("2024", False),
    ("AB", False),
    ("ABC123", False),
    ("X9Y8Z7W6V5", False),
    ("PRET", False),
    ("ABCDEFGHIJ", True),
    ("REFERENCE12345", True),
    ("NETFLIX", True),
])
def test_is_keyword(token, expected):
    assert is_keyword(token) is expected
