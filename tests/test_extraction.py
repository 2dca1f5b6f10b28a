"""
test_extraction.py -- Tests for the pattern library, extractor and router.

Everything here is pure string-in, string-out: no network, no files.
Covers:
  - each pattern category against realistic tender snippets
  - summary assembly, caps, ordering and confidence levels
  - router priority and the "matched but empty" vs "no match" split

Run with:
    python tests/test_extraction.py
    python -m pytest tests/test_extraction.py -v
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Make sure the project root is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from tender_assistant.extraction import confidence_for, extract, short_summary
from tender_assistant.patterns import (
    PROCUREMENT_KEYWORDS,
    contains_any,
    find_amounts,
    find_contacts,
    find_dates,
    first_keyword,
    matching_lines,
)
from tender_assistant.router import Intent, match_intent, route
from tender_assistant.sample import SAMPLE_TENDER_TEXT

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")

NOTICE = (
    "Tender No: X\n"
    "Last Date of Submission: 28/02/2024\n"
    "Estimated Value: ₹50,00,000\n"
    "Email: a@b.gov.in"
)


def test_date_formats():
    text = (
        "Issued 15/01/2024, pre-bid on 2024-02-05, corrigendum 3-2-24, "
        "bids due by March 15, 2024 or Feb 28 2024."
    )
    assert find_dates(text) == [
        "15/01/2024", "2024-02-05", "3-2-24", "March 15, 2024", "Feb 28 2024",
    ]
    print("  ✓ test_date_formats")


def test_date_ignores_reference_numbers():
    """Tender refs and STD-coded landlines are not dates."""
    assert find_dates("Tender No: MOD/2024/001") == []
    assert find_dates("Phone: +91-11-23011234") == []
    print("  ✓ test_date_ignores_reference_numbers")


def test_money_formats():
    text = "EMD ₹2,50,000.00 and fee $1,250.00; project cost 2.50 crore, turnover 15 Lakh."
    assert find_amounts(text) == ["₹2,50,000.00", "$1,250.00", "2.50 crore", "15 Lakh"]
    print("  ✓ test_money_formats")


def test_money_symbol_wins_over_scale_word():
    assert find_amounts("at least ₹1 crore") == ["₹1"]
    print("  ✓ test_money_symbol_wins_over_scale_word")


def test_contacts_emails_and_mobiles():
    text = (
        "Call 9876543210 or +919123456789 or 09812345678, "
        "mail tenders@cpwd.gov.in. Office: +91-11-23011234, fax 1234567890."
    )
    assert find_contacts(text) == [
        "9876543210", "+919123456789", "09812345678", "tenders@cpwd.gov.in",
    ]
    print("  ✓ test_contacts_emails_and_mobiles")


def test_contacts_reject_longer_digit_runs():
    assert find_contacts("Account 98765432101234") == []
    print("  ✓ test_contacts_reject_longer_digit_runs")


def test_scan_limit_keeps_first_occurrences():
    text = " ".join(f"0{d}/01/2024" for d in range(1, 8))
    assert find_dates(text, limit=5) == [f"0{d}/01/2024" for d in range(1, 6)]
    assert len(find_dates(text)) == 7
    print("  ✓ test_scan_limit_keeps_first_occurrences")


def test_keyword_helpers():
    assert contains_any("REQUEST FOR PROPOSAL (RFP)", PROCUREMENT_KEYWORDS)
    assert not contains_any("Annual report", PROCUREMENT_KEYWORDS)
    assert first_keyword("Quotation invited. Tender ref 12", PROCUREMENT_KEYWORDS) == "tender"
    assert first_keyword("nothing here", PROCUREMENT_KEYWORDS) is None
    assert matching_lines("  Late fee applies  \nNo issue\nPENALTY: 1%", ("late", "penalty")) == [
        "Late fee applies", "PENALTY: 1%",
    ]
    print("  ✓ test_keyword_helpers")


def test_extract_empty_document():
    result = extract("")
    assert result.short_summary == "Document processed successfully"
    assert result.relevance_to_officials == []
    assert result.action_items == []
    assert result.confidence_estimate == "low"
    print("  ✓ test_extract_empty_document")


def test_extract_whitespace_document():
    result = extract("   \n\t  ")
    assert result.short_summary == "Document processed successfully"
    assert result.confidence_estimate == "low"
    print("  ✓ test_extract_whitespace_document")


def test_extract_minimal_document():
    result = extract("This is a simple document with no special information.")
    assert result.short_summary
    assert result.confidence_estimate == "low"
    print("  ✓ test_extract_minimal_document")


def test_extract_single_category_is_medium():
    result = extract("Submit by 01/02/2024")
    assert result.relevance_to_officials == ["Deadlines found: 01/02/2024"]
    assert result.action_items == ["Review submission deadlines and plan accordingly"]
    assert result.confidence_estimate == "medium"
    print("  ✓ test_extract_single_category_is_medium")


def test_extract_caps_dates_at_five():
    text = "Key dates: " + " ".join(f"0{d}/03/2024" for d in range(1, 8))
    result = extract(text)
    assert result.relevance_to_officials[0] == (
        "Deadlines found: 01/03/2024, 02/03/2024, 03/03/2024, 04/03/2024, 05/03/2024"
    )
    print("  ✓ test_extract_caps_dates_at_five")


def test_extract_caps_amounts_at_five():
    text = " ".join(f"₹{i},000" for i in range(1, 8))
    result = extract(text)
    assert result.relevance_to_officials == [
        "Financial values: ₹1,000, ₹2,000, ₹3,000, ₹4,000, ₹5,000"
    ]
    print("  ✓ test_extract_caps_amounts_at_five")


def test_extract_caps_contacts_at_three():
    text = "a@x.in b@x.in c@x.in d@x.in"
    result = extract(text)
    assert result.relevance_to_officials == ["Contact information: a@x.in, b@x.in, c@x.in"]
    print("  ✓ test_extract_caps_contacts_at_three")


def test_extract_notice_is_high_confidence():
    result = extract(NOTICE)
    assert result.relevance_to_officials == [
        "Deadlines found: 28/02/2024",
        "Financial values: ₹50,00,000",
        "Contact information: a@b.gov.in",
        "Procurement/tender document identified",
    ]
    assert result.action_items == [
        "Review submission deadlines and plan accordingly",
        "Verify budget allocation and financial requirements",
        "Save contact details for inquiries",
        "Review procurement process and requirements",
    ]
    assert result.confidence_estimate == "high"
    print("  ✓ test_extract_notice_is_high_confidence")


def test_extract_sample_notice():
    result = extract(SAMPLE_TENDER_TEXT)
    assert result.relevance_to_officials == [
        "Deadlines found: 15/01/2024, 28/02/2024",
        "Financial values: ₹50,00,000, ₹1, ₹10,000",
        "Eligibility criteria mentioned in document",
        "Contact information: procurement@mod.gov.in",
        "Procurement/tender document identified",
    ]
    assert len(result.action_items) == 5
    assert result.confidence_estimate == "high"
    print("  ✓ test_extract_sample_notice")


def test_extract_is_idempotent():
    assert extract(SAMPLE_TENDER_TEXT) == extract(SAMPLE_TENDER_TEXT)
    print("  ✓ test_extract_is_idempotent")


def test_short_summary_first_three_segments():
    assert short_summary("One.Two.Three.Four") == "One. Two. Three"
    assert short_summary("No full stop at all") == "No full stop at all"
    print("  ✓ test_short_summary_first_three_segments")


def test_confidence_mapping():
    assert confidence_for(0) == "low"
    assert confidence_for(1) == "medium"
    assert confidence_for(2) == "medium"
    assert confidence_for(3) == "high"
    assert confidence_for(5) == "high"
    print("  ✓ test_confidence_mapping")


def test_route_deadline_lists_only_dates():
    answer = route("Give me the deadline", NOTICE)
    assert answer == "📅 **Deadlines Found:**\n• 28/02/2024"
    assert answer.count("•") == 1
    print("  ✓ test_route_deadline_lists_only_dates")


def test_route_priority_deadline_beats_cost():
    answer = route("What is the deadline and cost?", NOTICE)
    assert answer.startswith("📅")
    assert "₹" not in answer
    assert match_intent("What is the deadline and cost?") is Intent.DEADLINE
    print("  ✓ test_route_priority_deadline_beats_cost")


def test_route_unlimited_matches():
    text = " ".join(f"0{d}/01/2024" for d in range(1, 8))
    answer = route("due date?", text)
    assert answer.count("•") == 7
    print("  ✓ test_route_unlimited_matches")


def test_route_financial_and_contact():
    assert route("What is the estimated cost?", SAMPLE_TENDER_TEXT) == (
        "💰 **Financial Information:**\n• ₹50,00,000\n• ₹1\n• ₹10,000"
    )
    assert route("Who should I contact?", SAMPLE_TENDER_TEXT) == (
        "📞 **Contact Information:**\n• procurement@mod.gov.in"
    )
    print("  ✓ test_route_financial_and_contact")


def test_route_line_filters():
    assert route("What are the eligibility requirements?", SAMPLE_TENDER_TEXT) == (
        "📋 **Eligibility Information:**\n• Eligibility Criteria:"
    )
    assert route("Any penalties?", SAMPLE_TENDER_TEXT) == (
        "⚠️ **Penalty Information:**\n• - Late submission: ₹10,000 per day"
    )
    print("  ✓ test_route_line_filters")


def test_route_document_type():
    assert route("What is this?", SAMPLE_TENDER_TEXT) == (
        "📄 **Document Type:** This appears to be a TENDER document for government procurement."
    )
    assert route("document type please", "Request for quotation") == (
        "📄 **Document Type:** This appears to be a QUOTATION document for government procurement."
    )
    assert route("What is this?", "Minutes of the meeting") == (
        "📄 **Document Type:** Government procurement document"
    )
    print("  ✓ test_route_document_type")


def test_route_matched_but_empty():
    """A matched intent with nothing found answers 'not found', never None."""
    empty = "Nothing useful in here"
    assert route("deadline?", empty) == "❌ No specific deadlines found in the document."
    assert route("budget?", empty) == "❌ No financial information found in the document."
    assert route("phone number?", empty) == "❌ No contact information found in the document."
    assert route("qualification?", empty) == "❌ No eligibility information found in the document."
    assert route("fine?", empty) == "❌ No penalty information found in the document."
    print("  ✓ test_route_matched_but_empty")


def test_route_no_match_returns_none():
    assert route("unrelated nonsense", NOTICE) is None
    assert route("Summarize for procurement officer", SAMPLE_TENDER_TEXT) is None
    assert match_intent("unrelated nonsense") is None
    print("  ✓ test_route_no_match_returns_none")


def test_route_is_case_insensitive():
    assert match_intent("WHAT IS THE DEADLINE") is Intent.DEADLINE
    assert match_intent("Email?") is Intent.CONTACT
    assert match_intent("Type Of Document") is Intent.DOCUMENT_TYPE
    print("  ✓ test_route_is_case_insensitive")


def run_all_tests():
    """Run all tests and report results."""
    print("\n" + "=" * 60)
    print("  Tender Assistant -- Extraction & Routing Tests")
    print("=" * 60 + "\n")

    tests = [
        # Patterns
        test_date_formats,
        test_date_ignores_reference_numbers,
        test_money_formats,
        test_money_symbol_wins_over_scale_word,
        test_contacts_emails_and_mobiles,
        test_contacts_reject_longer_digit_runs,
        test_scan_limit_keeps_first_occurrences,
        test_keyword_helpers,
        # Extractor
        test_extract_empty_document,
        test_extract_whitespace_document,
        test_extract_minimal_document,
        test_extract_single_category_is_medium,
        test_extract_caps_dates_at_five,
        test_extract_caps_amounts_at_five,
        test_extract_caps_contacts_at_three,
        test_extract_notice_is_high_confidence,
        test_extract_sample_notice,
        test_extract_is_idempotent,
        test_short_summary_first_three_segments,
        test_confidence_mapping,
        # Router
        test_route_deadline_lists_only_dates,
        test_route_priority_deadline_beats_cost,
        test_route_unlimited_matches,
        test_route_financial_and_contact,
        test_route_line_filters,
        test_route_document_type,
        test_route_matched_but_empty,
        test_route_no_match_returns_none,
        test_route_is_case_insensitive,
    ]

    passed = 0
    failed = 0

    for test_fn in tests:
        try:
            test_fn()
            passed += 1
        except Exception as exc:
            failed += 1
            print(f"  ✗ {test_fn.__name__} FAILED: {exc}")

    print(f"\n{'=' * 60}")
    print(f"  Results: {passed} passed, {failed} failed, {len(tests)} total")
    print(f"{'=' * 60}\n")

    return failed == 0


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
