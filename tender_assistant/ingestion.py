"""
ingestion.py -- Turns a file on disk into the plain text the assistant reads.

The extractor and router only ever see a string. This module is the one
place that knows about file formats:

  .pdf              pdfplumber, page by page, OCR for scanned pages
  .txt              read as UTF-8 (bad bytes replaced, not fatal)
  .docx             paragraphs, then table rows joined with " | "
  .jpg/.jpeg/.png   OCR

Each PDF page contributes its text followed by a newline, so the router's
line filters see page boundaries as line boundaries.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

import pdfplumber
from PIL import Image, ImageEnhance, ImageFilter

from tender_assistant.config import config

logger = logging.getLogger(__name__)


def load_document_text(file_path: str) -> str:
    """
    Load ``file_path`` and return its full text.

    Raises:
        FileNotFoundError: the path does not exist.
        ValueError: unsupported format, file too large, or a file the
            format's parser cannot read (corrupt PDF, not-really-a-docx).
    """
    path = Path(file_path)
    _validate_file(path)

    suffix = path.suffix.lower()
    try:
        if suffix == ".pdf":
            text = _read_pdf(path)
        elif suffix == ".txt":
            text = path.read_text(encoding="utf-8", errors="replace")
        elif suffix == ".docx":
            text = _read_docx(path)
        elif suffix in (".jpg", ".jpeg", ".png"):
            text = _read_image(path)
        else:
            raise ValueError(f"Unsupported format: {suffix}")
    except ValueError:
        raise
    except Exception as exc:
        # pdfminer, python-docx and PIL each raise their own exception types
        logger.error("Failed to read %s: %s", path.name, exc)
        raise ValueError(f"Could not read {path.name}: {exc}") from exc

    logger.info("Loaded %s: %d chars", path.name, len(text))
    return text


def _read_pdf(path: Path) -> str:
    """
    Extract text page by page, OCR-ing pages that look scanned.

    Signed annexures at the back of a tender are usually scans even when
    the body is typed, so the decision is made per page.
    """
    parts: List[str] = []
    ocr_pages = 0

    with pdfplumber.open(str(path)) as pdf:
        total_pages = len(pdf.pages)
        logger.info("Opening PDF: %s (%d pages)", path.name, total_pages)

        for idx, page in enumerate(pdf.pages, start=1):
            text = page.extract_text() or ""
            if len(text.strip()) < config.ingestion.scanned_char_threshold:
                logger.info(
                    "Page %d/%d: only %d chars, treating as scanned",
                    idx, total_pages, len(text.strip()),
                )
                text = _ocr_pdf_page(path, idx)
                ocr_pages += 1
            parts.append(text + "\n")

    logger.info(
        "Read %s: %d pages (%d OCR)", path.name, len(parts), ocr_pages
    )
    return "".join(parts)


def _ocr_pdf_page(pdf_path: Path, page_number: int) -> str:
    """Render one PDF page to an image and OCR it. Empty string on failure."""
    try:
        from pdf2image import convert_from_path

        images = convert_from_path(
            str(pdf_path),
            dpi=config.ingestion.dpi,
            first_page=page_number,
            last_page=page_number,
        )
    except ImportError:
        logger.error(
            "pdf2image not installed. Cannot OCR scanned pages. "
            "Install with: pip install pdf2image (also needs poppler)"
        )
        return ""
    except Exception as exc:
        # poppler failures come through as a grab-bag of exception types
        logger.warning("Rendering page %d for OCR failed: %s", page_number, exc)
        return ""

    if not images:
        logger.warning("pdf2image returned nothing for page %d", page_number)
        return ""
    return _ocr_image(_preprocess_image(images[0]))


def _read_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    parts: List[str] = [para.text for para in doc.paragraphs if para.text.strip()]

    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))

    return "\n".join(parts)


def _read_image(path: Path) -> str:
    with Image.open(str(path)) as img:
        return _ocr_image(_preprocess_image(img))


def _preprocess_image(img: Image.Image) -> Image.Image:
    """Grayscale, then contrast, then a median filter for scanner speckle."""
    img = img.convert("L")

    if config.ingestion.contrast_enhance:
        img = ImageEnhance.Contrast(img).enhance(2.0)

    if config.ingestion.denoise:
        img = img.filter(ImageFilter.MedianFilter(size=3))

    return img


def _ocr_image(img: Image.Image) -> str:
    import pytesseract

    pytesseract.pytesseract.tesseract_cmd = config.ingestion.tesseract_cmd

    try:
        return pytesseract.image_to_string(img, lang=config.ingestion.ocr_lang).strip()
    except Exception as exc:
        # missing binary, unreadable image, or a blank page
        logger.error("Tesseract failed: %s", exc)
        return ""


def _validate_file(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() not in config.ingestion.supported_formats:
        raise ValueError(
            f"Unsupported format '{path.suffix}'. "
            f"Supported: {', '.join(config.ingestion.supported_formats)}"
        )

    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > config.ingestion.max_file_size_mb:
        raise ValueError(
            f"File too large ({size_mb:.1f} MB). Max: {config.ingestion.max_file_size_mb} MB"
        )
