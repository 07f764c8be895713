"""PDF text extraction for resumes.

Pure Python + PyMuPDF. Documents arrive as bytes (fetching them from a file
store is the caller's job) and are opened from memory, so nothing touches
disk. Every opened document is closed before returning, on success or error.
"""

import logging
import re
from collections.abc import Iterable

import fitz  # PyMuPDF

from kazehire.core.config import ExtractionLimits, RankingConfig
from kazehire.core.errors import (
    ExtractionError,
    ExtractionFailureKind,
    NoUsableDocuments,
    PipelineErrors,
    extraction_issue,
)
from kazehire.pydantic_models.task_models import CandidateDocument, DocumentRef, ExtractedText

logger = logging.getLogger(__name__)

_PHONE_LINE = re.compile(r"^\+?\d[\d\s\-()]+$")
_NAME_LINE = re.compile(r"^[A-Za-z\s]{2,50}$")


class PDFReader:
    """In-memory PDF document with page-level text access."""

    def __init__(self, raw_bytes: bytes, name: str = "document.pdf"):
        """Open a PDF from bytes.

        Args:
            raw_bytes: The PDF file contents.
            name: Label used in errors and logs.

        Raises:
            ExtractionError: CORRUPT if the bytes are not a readable PDF.
        """
        self.name = name
        if len(raw_bytes) > ExtractionLimits.MAX_DOCUMENT_BYTES:
            raise ExtractionError(ExtractionFailureKind.CORRUPT, name, "document too large")

        try:
            self._doc = fitz.open(stream=raw_bytes, filetype="pdf")
        except (fitz.FileDataError, RuntimeError, ValueError) as e:
            raise ExtractionError(ExtractionFailureKind.CORRUPT, name, str(e)) from e

        if self._doc.needs_pass:
            self.close()
            raise ExtractionError(ExtractionFailureKind.CORRUPT, name, "encrypted")

    @property
    def page_count(self) -> int:
        """Total number of pages in the document."""
        return len(self._doc) if self._doc is not None else 0

    def read_page(self, page_num: int) -> str:
        """Read text from a single page (1-indexed)."""
        if page_num < 1 or page_num > self.page_count:
            raise IndexError(f"Page {page_num} out of range (1-{self.page_count})")
        return self._doc[page_num - 1].get_text()

    def read_all(self) -> str:
        """Read every page, stripped and joined by blank lines."""
        pages = [self.read_page(n).strip() for n in range(1, self.page_count + 1)]
        return "\n\n".join(page for page in pages if page)

    def close(self):
        """Close the document."""
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def __enter__(self):
        return self

    def __exit__(self, _exc_type, _exc_val, _exc_tb):
        self.close()
        return False


def guess_candidate_name(resume_text: str, fallback: str) -> str:
    """Guess the candidate's name from the top of a resume.

    Scans the first few non-empty lines, skipping headings such as "Resume",
    e-mail addresses and phone numbers, and accepts the first line of 2-4
    words made only of letters.

    Args:
        resume_text: Extracted resume text.
        fallback: Returned when no line looks like a name.

    Returns:
        The guessed name, or fallback.
    """
    lines = [line.strip() for line in resume_text.splitlines() if line.strip()]

    for line in lines[:RankingConfig.NAME_SCAN_LINES]:
        lowered = line.lower()
        if "resume" in lowered or "curriculum" in lowered or "@" in line:
            continue
        if _PHONE_LINE.match(line):
            continue

        words = line.split()
        if 2 <= len(words) <= 4 and _NAME_LINE.match(line):
            return " ".join(words)

    return fallback


class TextExtractor:
    """Turns documents into ExtractedText, one document at a time."""

    def __init__(self, min_text_length: int = ExtractionLimits.MIN_TEXT_LENGTH):
        self.min_text_length = min_text_length

    def extract(self, document: DocumentRef) -> ExtractedText:
        """Extract plain text from one document.

        Raises:
            ExtractionError: CORRUPT if the PDF cannot be read, EMPTY if the
                text is shorter than min_text_length.
        """
        label = document.display_name or document.source_identifier

        with PDFReader(document.raw_bytes, name=document.source_identifier) as reader:
            try:
                text = reader.read_all().strip()
            except RuntimeError as e:
                raise ExtractionError(
                    ExtractionFailureKind.CORRUPT, document.source_identifier, str(e)
                ) from e

        if len(text) < self.min_text_length:
            raise ExtractionError(
                ExtractionFailureKind.EMPTY,
                document.source_identifier,
                f"{len(text)} characters extracted",
            )

        display_name = label
        if isinstance(document, CandidateDocument):
            display_name = document.candidate_name or guess_candidate_name(text, fallback=label)

        logger.info("Extracted %d characters from %s", len(text), label)
        return ExtractedText(
            source_identifier=document.source_identifier,
            display_name=display_name,
            text=text,
        )

    def extract_many(
        self,
        documents: Iterable[DocumentRef],
        errors: PipelineErrors | None = None,
        task: str = "",
    ) -> list[ExtractedText]:
        """Extract every document independently, skipping failures.

        Args:
            documents: Documents in caller order.
            errors: Optional accumulator that receives one issue per failure.
            task: Task name recorded on each issue.

        Returns:
            Successfully extracted texts, in input order.

        Raises:
            NoUsableDocuments: If no document yielded usable text.
        """
        results: list[ExtractedText] = []
        failures: list[ExtractionError] = []

        documents = list(documents)
        for i, document in enumerate(documents, start=1):
            logger.debug("Extracting document %d/%d: %s", i, len(documents), document.source_identifier)
            try:
                results.append(self.extract(document))
            except ExtractionError as e:
                logger.warning("Skipping document %s: %s", document.source_identifier, e)
                failures.append(e)
                if errors is not None:
                    errors.add(extraction_issue(e, task))

        if not results:
            raise NoUsableDocuments(failures)

        logger.info("Extracted %d/%d documents", len(results), len(documents))
        return results
