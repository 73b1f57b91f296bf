import pytest

from finance_tracker.config import Settings, load_settings
from finance_tracker.exceptions import ConfigurationError


def test_defaults():
    assert load_settings({}) == Settings(
        recommendation_limit=5, fuzzy_window=200, statement_timeout_ms=0
    )


def test_values_from_environment():
    settings = load_settings({
        'RECOMMENDATION_LIMIT': '10',
        'FUZZY_WINDOW': '50',
        'DB_STATEMENT_TIMEOUT_MS': '2000',
    })
    assert settings.recommendation_limit == 10
    assert settings.fuzzy_window == 50
    assert settings.statement_timeout_ms == 2000


def test_blank_value_uses_default():
    assert load_settings({'FUZZY_WINDOW': ' '}).fuzzy_window == 200


@pytest.mark.parametrize("value", ['abc', '-1', '2.5'])
def test_invalid_values(value):
    with pytest.raises(ConfigurationError):
        load_settings({'RECOMMENDATION_LIMIT': value})


def test_fuzzy_window_upper_bound():
    assert load_settings({'FUZZY_WINDOW': '200'}).fuzzy_window == 200
    with pytest.raises(ConfigurationError):
        load_settings({'FUZZY_WINDOW': '201'})
    with pytest.raises(ConfigurationError):
        load_settings({'FUZZY_WINDOW': '100000'})
