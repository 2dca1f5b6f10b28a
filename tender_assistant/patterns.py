"""
patterns.py -- The shared pattern library for dates, money and contacts.

Both the full-document summary and the per-question router scan with the
patterns defined here. They used to carry their own copies of each regex
and the copies drifted (the router picked up a date format the summary
never reported), so there is now exactly one compiled pattern per
category.

Digit classes are spelled [0-9] rather than \\d. Python's \\d
also matches Devanagari and other Unicode digits, and OCR output from
bilingual tenders is full of those. We only want ASCII numerals.
"""

from __future__ import annotations

import re
from itertools import islice
from typing import Iterable, List, Optional

# 15/01/2024, 28-02-24, 2024-02-28, "Feb 28, 2024", "March 5 2024"
DATE_PATTERN = re.compile(
    r"\b[0-9]{1,2}[/-][0-9]{1,2}[/-][0-9]{2,4}\b"
    r"|\b[0-9]{4}[/-][0-9]{1,2}[/-][0-9]{1,2}\b"
    r"|\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+[0-9]{1,2},?\s+[0-9]{4}\b",
    re.IGNORECASE,
)

# ₹50,00,000 / $1,250.00 / "2.50 crore" / "10,000 thousand"
MONEY_PATTERN = re.compile(
    r"[₹$€£]\s*[0-9,]+(?:\.[0-9]{2})?"
    r"|\b[0-9]{1,3}(?:,[0-9]{3})*(?:\.[0-9]{2})?\s*(?:lakh|crore|thousand|million|billion)\b",
    re.IGNORECASE,
)

# Emails, plus Indian mobile numbers (10 digits starting 6-9) with an
# optional +91 or trunk 0. Landlines with STD codes are left alone; they
# show up in too many formats to match reliably.
CONTACT_PATTERN = re.compile(
    r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"
    r"|(?<![\w+])(?:\+91|0)?[6-9][0-9]{9}\b"
)

ELIGIBILITY_KEYWORDS = ("eligibility", "qualification", "criteria", "requirement", "minimum")
# "minimum" is too common to use for line filtering, so the router drops it.
ELIGIBILITY_LINE_KEYWORDS = ("eligibility", "qualification", "criteria", "requirement")
PENALTY_LINE_KEYWORDS = ("penalty", "fine", "late")
# Order matters: the router names the first one present as the doc type.
PROCUREMENT_KEYWORDS = ("tender", "procurement", "bid", "quotation", "rfp", "rfq")


def _scan(pattern: re.Pattern, text: str, limit: Optional[int]) -> List[str]:
    return [m.group(0) for m in islice(pattern.finditer(text), limit)]


def find_dates(text: str, limit: Optional[int] = None) -> List[str]:
    """Date tokens in order of first occurrence, at most ``limit``."""
    return _scan(DATE_PATTERN, text, limit)


def find_amounts(text: str, limit: Optional[int] = None) -> List[str]:
    """Monetary amounts in order of first occurrence, at most ``limit``."""
    return _scan(MONEY_PATTERN, text, limit)


def find_contacts(text: str, limit: Optional[int] = None) -> List[str]:
    """Emails and mobile numbers in order of first occurrence."""
    return _scan(CONTACT_PATTERN, text, limit)


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive substring presence of any keyword."""
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def first_keyword(text: str, keywords: Iterable[str]) -> Optional[str]:
    """The first keyword (in ``keywords`` order) present in ``text``."""
    lowered = text.lower()
    for keyword in keywords:
        if keyword in lowered:
            return keyword
    return None


def matching_lines(text: str, keywords: Iterable[str]) -> List[str]:
    """
    Trimmed lines of ``text`` that mention any keyword.

    Lines are split on newline only. PDF text comes out one visual line
    per row, which is the granularity officials want to see quoted back.
    """
    keywords = tuple(keywords)
    return [
        line.strip()
        for line in text.split("\n")
        if any(keyword in line.lower() for keyword in keywords)
    ]
