"""
config.py -- Central configuration for the tender assistant.

Every cap, keyword budget and remote-service setting lives here. The
extractor and router read their limits from this module instead of
hard-coding them, so the summary output and the API stay in step.

Defaults can be overridden with environment variables, which is how the
desktop build and the API server pick their summarizer mode and the
OpenRouter key.
"""

from dataclasses import dataclass, field
import os
import logging

logger = logging.getLogger(__name__)

SUMMARIZER_MODES = ("local", "remote")


@dataclass
class ExtractionConfig:
    """
    Caps on how many findings make it into a summary line.

    Officials read the relevance list on a phone more often than not, so
    five dates, five amounts and three contacts is about what fits before
    the line wraps into noise. The query router ignores these caps and
    lists every match.
    """
    max_dates: int = 5
    max_amounts: int = 5
    max_contacts: int = 3
    summary_sentences: int = 3
    fallback_summary: str = "Document processed successfully"


@dataclass
class RemoteConfig:
    """
    OpenRouter chat-completions settings for the remote summarizer.

    gpt-3.5-turbo is plenty for a four-key JSON answer. Temperature 0.3
    keeps the bullets close to the document wording without making every
    answer identical.
    """
    api_key: str = os.getenv("OPENROUTER_API_KEY", "")
    base_url: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    model: str = os.getenv("OPENROUTER_MODEL", "openai/gpt-3.5-turbo")
    max_tokens: int = 1000
    temperature: float = 0.3
    timeout_seconds: float = 60.0
    referer: str = "http://localhost:3000"
    title: str = "PDF Summarizer"
    # Long tenders blow past the model context. We clip the document to
    # this many tokens before building the prompt.
    max_prompt_tokens: int = 12000
    tiktoken_encoding: str = "cl100k_base"


@dataclass
class IngestionConfig:
    """
    Document loading and OCR settings.

    Pages with fewer than 50 extracted characters are treated as scans
    and sent to Tesseract at 300 DPI.
    """
    tesseract_cmd: str = os.getenv(
        "TESSERACT_CMD",
        r"C:\Program Files\Tesseract-OCR\tesseract.exe"
        if os.name == "nt"
        else "tesseract",
    )
    ocr_lang: str = "eng"
    scanned_char_threshold: int = 50
    dpi: int = 300
    contrast_enhance: bool = True
    denoise: bool = True
    max_file_size_mb: int = 50
    supported_formats: tuple = (".pdf", ".txt", ".docx", ".jpg", ".jpeg", ".png")


@dataclass
class Config:
    """Master config -- instantiated once, used everywhere."""
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)

    summarizer_mode: str = os.getenv("SUMMARIZER_MODE", "local")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self):
        """Fail fast on settings that would only blow up mid-conversation."""
        self.summarizer_mode = self.summarizer_mode.strip().lower()
        if self.summarizer_mode not in SUMMARIZER_MODES:
            raise ValueError(
                f"Summarizer mode must be one of {SUMMARIZER_MODES}, "
                f"got '{self.summarizer_mode}'"
            )

        caps = {
            "max_dates": self.extraction.max_dates,
            "max_amounts": self.extraction.max_amounts,
            "max_contacts": self.extraction.max_contacts,
            "summary_sentences": self.extraction.summary_sentences,
        }
        for name, value in caps.items():
            if value < 1:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.summarizer_mode == "remote" and not self.remote.api_key:
            logger.warning(
                "Remote summarizer selected but OPENROUTER_API_KEY is not set. "
                "Full summaries will fail until a key is configured."
            )


# Singleton -- every module imports this same instance
config = Config()
