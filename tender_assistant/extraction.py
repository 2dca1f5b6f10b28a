"""
extraction.py -- Local fact extractor that builds a SummaryResult.

This is the summarizer that runs with no network and no model. It makes
a fixed pass of pattern scans over the whole document, and each scan that
finds something contributes one relevance line and one action item:

  1. dates            -> "Deadlines found: ..."
  2. money amounts    -> "Financial values: ..."
  3. eligibility words -> presence only
  4. contacts         -> "Contact information: ..."
  5. procurement words -> presence only

The order of the lines is the scan order, so the output is reproducible.
Confidence is just a count of how many scans hit: three or more is high,
at least one is medium, none is low.

extract() never raises. An empty document gives empty lists, the
fallback summary and "low".
"""

from __future__ import annotations

import logging
from typing import List

from tender_assistant.config import config
from tender_assistant.patterns import (
    ELIGIBILITY_KEYWORDS,
    PROCUREMENT_KEYWORDS,
    contains_any,
    find_amounts,
    find_contacts,
    find_dates,
)
from tender_assistant.schemas import Confidence, SummaryResult

logger = logging.getLogger(__name__)


def extract(text: str) -> SummaryResult:
    """Run every scan over ``text`` and assemble the structured summary."""
    cfg = config.extraction
    relevance: List[str] = []
    actions: List[str] = []

    dates = find_dates(text, limit=cfg.max_dates)
    if dates:
        relevance.append(f"Deadlines found: {', '.join(dates)}")
        actions.append("Review submission deadlines and plan accordingly")

    amounts = find_amounts(text, limit=cfg.max_amounts)
    if amounts:
        relevance.append(f"Financial values: {', '.join(amounts)}")
        actions.append("Verify budget allocation and financial requirements")

    if contains_any(text, ELIGIBILITY_KEYWORDS):
        relevance.append("Eligibility criteria mentioned in document")
        actions.append("Review eligibility requirements and ensure compliance")

    contacts = find_contacts(text, limit=cfg.max_contacts)
    if contacts:
        relevance.append(f"Contact information: {', '.join(contacts)}")
        actions.append("Save contact details for inquiries")

    if contains_any(text, PROCUREMENT_KEYWORDS):
        relevance.append("Procurement/tender document identified")
        actions.append("Review procurement process and requirements")

    result = SummaryResult(
        short_summary=short_summary(text),
        relevance_to_officials=relevance,
        action_items=actions,
        confidence_estimate=confidence_for(len(relevance)),
    )
    logger.debug(
        "Extracted %d relevance lines from %d chars (confidence=%s)",
        len(relevance), len(text), result.confidence_estimate,
    )
    return result


def short_summary(text: str) -> str:
    """
    First few '.'-separated segments of the text, rejoined.

    "Tender No. 12" splits mid-reference. The summary is only a preview;
    the relevance lines carry the facts.
    """
    segments = text.split(".")[: config.extraction.summary_sentences]
    summary = ". ".join(segments).strip()
    return summary or config.extraction.fallback_summary


def confidence_for(relevance_count: int) -> Confidence:
    """Map the number of relevance lines to a confidence label."""
    if relevance_count >= 3:
        return "high"
    elif relevance_count >= 1:
        return "medium"
    return "low"
