"""
router.py -- Answers specific questions about the loaded document.

Each user prompt is tested against an ordered list of intents. The first
intent whose trigger words appear in the (lower-cased) prompt owns the
question, runs its own narrow scan over the document, and returns a
short formatted answer. "What is the deadline and cost?" is a deadline
question, full stop.

Two outcomes must never be confused:

  * an intent matched but its scan came up empty -> a "❌ No ... found"
    message, which the caller shows as-is;
  * no intent matched at all -> route() returns None, and the caller
    falls back to the full summary.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from tender_assistant.patterns import (
    ELIGIBILITY_LINE_KEYWORDS,
    PENALTY_LINE_KEYWORDS,
    PROCUREMENT_KEYWORDS,
    find_amounts,
    find_contacts,
    find_dates,
    first_keyword,
    matching_lines,
)

logger = logging.getLogger(__name__)


class Intent(str, Enum):
    DEADLINE = "deadline"
    FINANCIAL = "financial"
    CONTACT = "contact"
    ELIGIBILITY = "eligibility"
    PENALTY = "penalty"
    DOCUMENT_TYPE = "document_type"


def _bullets(header: str, items: Sequence[str]) -> str:
    return header + "\n" + "\n".join(f"• {item}" for item in items)


def _answer_deadlines(text: str) -> str:
    dates = find_dates(text)
    if dates:
        return _bullets("📅 **Deadlines Found:**", dates)
    return "❌ No specific deadlines found in the document."


def _answer_financial(text: str) -> str:
    amounts = find_amounts(text)
    if amounts:
        return _bullets("💰 **Financial Information:**", amounts)
    return "❌ No financial information found in the document."


def _answer_contacts(text: str) -> str:
    contacts = find_contacts(text)
    if contacts:
        return _bullets("📞 **Contact Information:**", contacts)
    return "❌ No contact information found in the document."


def _answer_eligibility(text: str) -> str:
    lines = matching_lines(text, ELIGIBILITY_LINE_KEYWORDS)
    if lines:
        return _bullets("📋 **Eligibility Information:**", lines)
    return "❌ No eligibility information found in the document."


def _answer_penalties(text: str) -> str:
    lines = matching_lines(text, PENALTY_LINE_KEYWORDS)
    if lines:
        return _bullets("⚠️ **Penalty Information:**", lines)
    return "❌ No penalty information found in the document."


def _answer_document_type(text: str) -> str:
    keyword = first_keyword(text, PROCUREMENT_KEYWORDS)
    if keyword:
        return (
            f"📄 **Document Type:** This appears to be a {keyword.upper()} "
            f"document for government procurement."
        )
    return "📄 **Document Type:** Government procurement document"


# Priority order. Earlier rows win when a prompt mentions several topics.
INTENT_RULES: List[Tuple[Intent, Tuple[str, ...], Callable[[str], str]]] = [
    (Intent.DEADLINE, ("deadline", "due date", "submission date"), _answer_deadlines),
    (Intent.FINANCIAL, ("cost", "price", "value", "amount", "budget"), _answer_financial),
    (Intent.CONTACT, ("contact", "email", "phone", "address"), _answer_contacts),
    (Intent.ELIGIBILITY, ("eligibility", "qualification", "criteria", "requirement"), _answer_eligibility),
    (Intent.PENALTY, ("penalty", "fine", "penalties"), _answer_penalties),
    (Intent.DOCUMENT_TYPE, ("what is this", "type of document", "document type"), _answer_document_type),
]


def _match_rule(query: str):
    lowered = query.lower()
    for rule in INTENT_RULES:
        _, triggers, _ = rule
        if any(trigger in lowered for trigger in triggers):
            return rule
    return None


def match_intent(query: str) -> Optional[Intent]:
    """The highest-priority intent triggered by ``query``, or None."""
    rule = _match_rule(query)
    return rule[0] if rule else None


def route(query: str, text: str) -> Optional[str]:
    """
    Answer ``query`` from ``text`` if it is a specific question.

    Returns the formatted answer (possibly a "not found" message) when an
    intent matches, or None when the caller should produce a full summary.
    """
    rule = _match_rule(query)
    if rule is None:
        logger.info("No specific intent in query, falling back to full summary")
        return None

    intent, _, handler = rule
    logger.info("Routed query to %s handler", intent.value)
    return handler(text)
