"""
orchestrator.py -- Sequences a chat turn: router first, summary as fallback.

DocumentAssistant holds the only state in the system: the text of the
currently loaded document, where it came from, which summarizer is in
use, and the conversation so far. Everything it calls (router, extractor,
summarizers) is handed the text explicitly and keeps nothing between
calls.

Per submission:
  1. append the user's turn
  2. ask the router; if it answers, append that answer and stop
  3. otherwise ask the summarizer for a full SummaryResult and append it
  4. if the summarizer fails, append an error turn with a hint that
     depends on the mode, and stop (no retry)
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tender_assistant.config import config
from tender_assistant.ingestion import load_document_text
from tender_assistant.router import route
from tender_assistant.schemas import Conversation, Turn
from tender_assistant.summarizer import Summarizer, SummarizerError, get_summarizer

logger = logging.getLogger(__name__)

PRESET_PROMPT = "Summarize for procurement officer"
SUMMARY_INTRO = "Here is the complete summary for government officials:"

_ERROR_HINTS = {
    "remote": "Try switching to local mode or check your API key.",
    "local": "Please try again.",
}


class DocumentAssistant:
    """
    Chat session over one loaded document at a time.

    Usage:
        assistant = DocumentAssistant()
        assistant.load_document("tender.pdf")
        for turn in assistant.submit("What is the deadline?"):
            print(turn.content)
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        summarizer: Optional[Summarizer] = None,
    ):
        self.mode = (mode or config.summarizer_mode).strip().lower()
        self.summarizer = summarizer if summarizer is not None else get_summarizer(self.mode)
        self.conversation = Conversation()
        self.text = ""
        self.source_name: Optional[str] = None

    @property
    def turns(self) -> List[Turn]:
        return self.conversation.turns

    @property
    def has_document(self) -> bool:
        return bool(self.text.strip())

    def load_text(self, text: str, source_name: Optional[str] = None) -> None:
        """Replace the loaded document. The conversation is kept."""
        self.text = text
        self.source_name = source_name
        logger.info("Loaded document '%s' (%d chars)", source_name or "<text>", len(text))

    def load_document(self, file_path: str) -> None:
        """Read ``file_path`` through ingestion and load its text."""
        self.load_text(load_document_text(file_path), source_name=file_path)

    def set_mode(self, mode: str) -> None:
        """Switch between the local and remote summarizer."""
        self.summarizer = get_summarizer(mode)
        self.mode = mode.strip().lower()
        logger.info("Summarizer mode set to %s", self.mode)

    def submit(self, prompt: str) -> List[Turn]:
        """
        Run one user turn and return the turns it appended.

        Raises:
            ValueError: nothing (or only whitespace) is loaded.
        """
        if not self.has_document:
            raise ValueError("Please select and process a document first.")

        new_turns = [self.conversation.append(Turn(role="user", content=prompt))]

        answer = route(prompt, self.text)
        if answer is not None:
            new_turns.append(
                self.conversation.append(Turn(role="assistant", content=answer))
            )
            return new_turns

        try:
            summary = self.summarizer.summarize(self.text)
        except SummarizerError as exc:
            logger.error("Summarization failed (%s mode): %s", self.mode, exc)
            hint = _ERROR_HINTS.get(self.mode, _ERROR_HINTS["local"])
            message = f"Error: {str(exc).rstrip('.')}. {hint}"
            new_turns.append(
                self.conversation.append(
                    Turn(role="assistant", content=message, is_error=True)
                )
            )
            return new_turns

        new_turns.append(
            self.conversation.append(
                Turn(role="assistant", content=SUMMARY_INTRO, summary=summary)
            )
        )
        return new_turns

    def summarize_preset(self) -> List[Turn]:
        """Submit the one-click "summarize for procurement officer" prompt."""
        return self.submit(PRESET_PROMPT)
