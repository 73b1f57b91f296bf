"""
Finance Tracker

Personal finance tracker that suggests tags and recurring transactions
for imported bank transactions.
"""

__version__ = "1.0.0"
