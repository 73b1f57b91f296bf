"""
Keyword Extraction

Splits a transaction label into the words worth searching the history
for: merchant names, places, products. Bank jargon, dates, reference
codes and short filler words are dropped.
"""
import re
from typing import Optional, Set

from .label_normalizer import normalize_label

TOKEN_SEPARATOR_PATTERN = re.compile(r'[\s\-_/]+')

DATE_PATTERN = re.compile(r'\d{1,2}/\d{1,2}(/\d{2,4})?')
NUMERIC_PATTERN = re.compile(r'\d+')
SHORT_ALNUM_PATTERN = re.compile(r'[A-Z0-9]{1,2}')
# Bank reference codes: 6-10 alphanumerics with at least one digit
REFERENCE_CODE_PATTERN = re.compile(r'(?=[A-Z]*\d)[A-Z0-9]{6,10}')

MIN_KEYWORD_LENGTH = 3

BANKING_STOP_WORDS = {
    'CARTE', 'VIR', 'VIRT', 'PRLV', 'INST', 'VERS', 'ANN', 'ECH', 'PRET',
}
ARTICLE_STOP_WORDS = {
    'DE', 'DU', 'LA', 'LE', 'LES', 'UN', 'UNE', 'DES', 'AU', 'AUX',
    'ET', 'EN', 'POUR', 'PAR', 'SUR',
}
BUSINESS_STOP_WORDS = {
    'PAYM', 'PAYMENT', 'PAYMENTS', 'SA', 'SAS', 'SARL', 'EURL', 'PAI',
}
STOP_WORDS = BANKING_STOP_WORDS | ARTICLE_STOP_WORDS | BUSINESS_STOP_WORDS


def is_keyword(token: str) -> bool:
    """Check whether a normalized token is a meaningful keyword"""
    if not token:
        return False
    if DATE_PATTERN.fullmatch(token):
        return False
    if NUMERIC_PATTERN.fullmatch(token) or SHORT_ALNUM_PATTERN.fullmatch(token):
        return False
    if REFERENCE_CODE_PATTERN.fullmatch(token):
        return False
    if len(token) < MIN_KEYWORD_LENGTH:
        return False
    return token not in STOP_WORDS


def extract_keywords(raw_label: Optional[str]) -> Set[str]:
    """
    Extract the searchable keywords of a label.

    Args:
        raw_label: Label as it appears on the bank statement

    Returns:
        Set of unique uppercase keywords (empty for no label)
    """
    normalized = normalize_label(raw_label)
    if not normalized:
        return set()

    tokens = (token.strip() for token in TOKEN_SEPARATOR_PATTERN.split(normalized))
    return {token for token in tokens if is_keyword(token)}
