"""
summarizer.py -- Local and remote implementations of "text in, SummaryResult out".

The assistant has two ways of producing a full summary:

  local   -- the pattern extractor in extraction.py. Instant, offline,
             deterministic. The default.
  remote  -- an OpenRouter chat-completions call asking a hosted model for
             the same four-key JSON. Better prose, needs a key and a
             network, and can fail.

Both satisfy the Summarizer protocol, and the choice is made explicitly
through config.summarizer_mode or the CLI/API, never by sniffing the
environment at call time.

The remote path makes exactly one request per summary. If it fails we
raise SummarizerError and let the caller tell the user. No retries; the
user resubmits, usually after switching to local mode.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from tender_assistant.config import SUMMARIZER_MODES, config
from tender_assistant.extraction import extract
from tender_assistant.schemas import SummaryResult

logger = logging.getLogger(__name__)


SUMMARY_PROMPT = (
    "You are a summarizer for Indian government procurement officers. "
    "From the provided document extract the most important bullets an officer "
    "needs to act on: procurement value, submission deadline(s), eligibility "
    "criteria, required documents, penalties, key contacts, and suggested next "
    "steps. Return JSON with keys short_summary, relevance_to_officials (array), "
    "action_items (array), confidence_estimate (one of low, medium, high).\n\n"
    "Document text:\n{text}"
)


class SummarizerError(RuntimeError):
    """A summary could not be produced. The message is shown to the user."""


class Summarizer(Protocol):
    def summarize(self, text: str) -> SummaryResult:
        ...


class LocalSummarizer:
    """Offline summarizer backed by the pattern extractor."""

    mode = "local"

    def summarize(self, text: str) -> SummaryResult:
        return extract(text)


class RemoteSummarizer:
    """
    Summarizer that asks an OpenRouter-hosted model for the summary JSON.

    Pass ``client`` to reuse a caller-owned connection pool or to inject a
    mock transport in tests. Without one, a short-lived client is opened
    per call.
    """

    mode = "remote"

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key if api_key is not None else config.remote.api_key
        self._client = client

    def summarize(self, text: str) -> SummaryResult:
        if not self.api_key:
            raise SummarizerError(
                "OpenRouter API key not found. Please set OPENROUTER_API_KEY "
                "environment variable or use local mode."
            )

        payload = self._build_payload(text)
        response = self._post(payload)

        if not response.is_success:
            raise SummarizerError(
                f"API request failed with status: {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise SummarizerError(f"Failed to parse API response: {exc}") from exc

        content = _message_content(body)
        if not content:
            raise SummarizerError("No content in API response")

        parsed = _parse_json_output(content)
        if parsed is None:
            logger.error(
                "Could not parse model output as JSON. First 500 chars: %s",
                content[:500],
            )
            raise SummarizerError("Failed to parse summary JSON")

        try:
            result = SummaryResult.model_validate(parsed)
        except ValidationError as exc:
            raise SummarizerError(f"Summary JSON has the wrong shape: {exc}") from exc

        logger.info(
            "Remote summary: %d relevance lines, confidence=%s",
            len(result.relevance_to_officials), result.confidence_estimate,
        )
        return result

    def _build_payload(self, text: str) -> Dict[str, Any]:
        cfg = config.remote
        prompt = SUMMARY_PROMPT.format(
            text=_clip_to_token_budget(text, cfg.max_prompt_tokens)
        )
        return {
            "model": cfg.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": cfg.max_tokens,
            "temperature": cfg.temperature,
        }

    def _post(self, payload: Dict[str, Any]) -> httpx.Response:
        cfg = config.remote
        url = f"{cfg.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": cfg.referer,
            "X-Title": cfg.title,
        }
        logger.info("Requesting remote summary from %s (%s)", url, cfg.model)

        try:
            if self._client is not None:
                return self._client.post(url, headers=headers, json=payload)
            with httpx.Client(timeout=cfg.timeout_seconds) as client:
                return client.post(url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            raise SummarizerError(f"API request failed: {exc}") from exc


def get_summarizer(mode: str) -> Summarizer:
    """Build the summarizer for an explicit mode name."""
    mode = mode.strip().lower()
    if mode == "local":
        return LocalSummarizer()
    if mode == "remote":
        return RemoteSummarizer()
    raise ValueError(f"Unknown summarizer mode '{mode}'. Expected one of {SUMMARIZER_MODES}")


def _message_content(body: Any) -> Optional[str]:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


def _clip_to_token_budget(text: str, max_tokens: int) -> str:
    """
    Trim the document to at most ``max_tokens`` tokens.

    Every token is at least one character, so anything shorter than the
    budget in characters is returned untouched without loading tiktoken.
    If tiktoken is unavailable we fall back to the ~4 chars/token rule.
    """
    if len(text) <= max_tokens:
        return text

    try:
        import tiktoken
        enc = tiktoken.get_encoding(config.remote.tiktoken_encoding)
        tokens = enc.encode(text)
        if len(tokens) <= max_tokens:
            return text
        logger.info("Clipping document from %d to %d tokens", len(tokens), max_tokens)
        return enc.decode(tokens[:max_tokens])
    except Exception as exc:
        logger.warning("tiktoken unavailable (%s), clipping by characters", exc)
        return text[: max_tokens * 4]


def _parse_json_output(text: str) -> Optional[Dict[str, Any]]:
    """
    Pull a JSON object out of a model answer.

    Tries, in order: the raw answer, the answer with ```json fences
    stripped, and the first {...} block in it. Returns None if all three
    fail or the result is not an object.
    """
    candidates = [text]
    cleaned = re.sub(r"```(?:json)?\s*", "", text).strip().rstrip("`")
    candidates.append(cleaned)
    match = re.search(r"\{[\s\S]*\}", cleaned)
    if match:
        candidates.append(match.group())

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(parsed, dict):
            return parsed
    return None
