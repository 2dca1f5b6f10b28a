"""
Tender Assistant -- question answering and summaries for tender documents.

Loads a government tender/procurement document, answers specific
questions about it (deadlines, costs, contacts, eligibility, penalties,
document type) and falls back to a structured summary for officials.
"""

__version__ = "1.0.0"
__author__ = "Tender Assistant"
