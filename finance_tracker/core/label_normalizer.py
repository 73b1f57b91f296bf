"""
Label Normalization Module

Converts raw bank statement labels into a canonical uppercase form
so that labels from different imports can be compared.
"""
import re
from typing import Optional

# Company legal forms written with dots/spaces (S.A.R.L., S A S, E.U.R.L.)
LEGAL_FORM_PATTERNS = [
    (re.compile(r'\bS\.?\s*A\.?\s*R\.?\s*L\b\.?'), 'SARL'),
    (re.compile(r'\bS\.?\s*A\.?\s*S\b\.?'), 'SAS'),
    (re.compile(r'\bE\.?\s*U\.?\s*R\.?\s*L\b\.?'), 'EURL'),
]

# "DUPONT ET CIE." / "DUPONT ET C." -> "DUPONT"
COMPANY_SUFFIX_PATTERN = re.compile(r'\s+ET\s+C(?:\.?I(?:\.?E)?)?\b\.?\s*$')

BRACKETS_PATTERN = re.compile(r'[()\[\]{}]')
WHITESPACE_PATTERN = re.compile(r'\s+')


def normalize_label(raw_label: Optional[str]) -> str:
    """
    Normalize a raw transaction label.

    Args:
        raw_label: Label as it appears on the bank statement

    Returns:
        Uppercased label with legal forms collapsed, company suffixes
        and brackets removed and whitespace squeezed ("" for no label)
    """
    if not raw_label:
        return ''

    text = raw_label.upper()

    for pattern, replacement in LEGAL_FORM_PATTERNS:
        text = pattern.sub(replacement, text)

    text = COMPANY_SUFFIX_PATTERN.sub('', text)
    text = BRACKETS_PATTERN.sub(' ', text)

    return WHITESPACE_PATTERN.sub(' ', text).strip()
