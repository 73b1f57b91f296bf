"""
Exceptions raised by the finance tracker
"""


class FinanceTrackerError(Exception):
    """Base class for finance tracker errors"""


class ConfigurationError(FinanceTrackerError):
    """An environment setting has an invalid value"""


class HistoryAccessError(FinanceTrackerError):
    """The transaction history could not be read"""
