"""Pytest configuration and shared fixtures.

Provides reusable test fixtures for:
- Real in-memory PDF documents (built with PyMuPDF)
- Mock litellm completions
- Sample provider configurations
- Sample model outputs for each task
"""

import json
import logging

import fitz
import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from kazehire.core.llm_client import ModelGateway, ProviderConfig
from kazehire.core.pipeline_logger import reset_logger
from kazehire.pydantic_models import CandidateDocument


# =============================================================================
# PDF documents
# =============================================================================


def _build_pdf(*pages: str) -> bytes:
    """Build a PDF in memory with one page per text argument."""
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text, fontsize=11)
    data = doc.tobytes()
    doc.close()
    return data


ALICE_RESUME = (
    "Alice Martin\n"
    "alice.martin@example.com\n"
    "Senior backend engineer, 8 years of Python and PostgreSQL.\n"
    "Built payment APIs with FastAPI and asyncio."
)

BOB_RESUME = (
    "Resume\n"
    "Bob Tanaka\n"
    "+81 90 1234 5678\n"
    "Frontend developer focused on React and TypeScript dashboards."
)

CAROL_RESUME = (
    "Carol Nguyen\n"
    "Data engineer with Spark, Airflow and five years of Python pipelines."
)


@pytest.fixture
def make_pdf():
    """Factory for in-memory PDFs: make_pdf("page one", "page two")."""
    return _build_pdf


@pytest.fixture
def alice_pdf():
    return _build_pdf(ALICE_RESUME)


@pytest.fixture
def bob_pdf():
    return _build_pdf(BOB_RESUME)


@pytest.fixture
def carol_pdf():
    return _build_pdf(CAROL_RESUME)


@pytest.fixture
def blank_pdf():
    """A valid PDF with a single empty page."""
    return _build_pdf("")


@pytest.fixture
def corrupt_bytes():
    return b"this is not a pdf at all"


@pytest.fixture
def candidate_documents(alice_pdf, bob_pdf, carol_pdf):
    """Three readable resumes with caller ids cand-a, cand-b, cand-c."""
    return [
        CandidateDocument(source_identifier="cand-a", raw_bytes=alice_pdf, display_name="alice.pdf"),
        CandidateDocument(source_identifier="cand-b", raw_bytes=bob_pdf, display_name="bob.pdf"),
        CandidateDocument(
            source_identifier="cand-c",
            raw_bytes=carol_pdf,
            display_name="carol.pdf",
            candidate_name="Carol Nguyen",
        ),
    ]


# =============================================================================
# Providers and completions
# =============================================================================


@pytest.fixture
def make_completion():
    """Factory for mock chat-completion envelopes with the given message content."""
    def _create(content):
        return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])

    return _create


@pytest.fixture
def providers():
    """Two providers in preference order."""
    return [
        ProviderConfig("openrouter", "openrouter/test-model", api_key="or-key"),
        ProviderConfig("gemini", "gemini/test-model", api_key="gm-key"),
    ]


@pytest.fixture
def gateway(providers):
    return ModelGateway(providers)


@pytest.fixture
def mock_acompletion():
    """Patch litellm's acompletion as seen by the gateway."""
    with patch("kazehire.core.llm_client.acompletion", new_callable=AsyncMock) as mock:
        yield mock


# =============================================================================
# Sample model outputs
# =============================================================================


def _ranking_entry(candidate_id, fit_score, name="Sam Rivera", concerns=("Limited leadership experience",)):
    """Build one ranking entry as the model would return it."""
    return {
        "candidate_id": candidate_id,
        "candidate_name": name,
        "fit_score": fit_score,
        "strengths": ["Relevant experience"],
        "concerns": list(concerns),
        "technical_skills": ["Python"],
        "reasoning": "Solid match for the role.",
    }


@pytest.fixture
def make_ranking_entry():
    """Factory for ranking entries as the model returns them."""
    return _ranking_entry


@pytest.fixture
def ranking_json():
    """Model output ranking three candidates, out of score order."""
    return json.dumps({
        "top_candidates": [
            _ranking_entry("candidate_2", 4, "Bob Tanaka"),
            _ranking_entry("candidate_1", 9, "Alice Martin"),
            _ranking_entry("candidate_3", 7, "Carol Nguyen"),
        ]
    })


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop the package logger handlers so each test binds to its own stderr."""
    yield
    reset_logger()
    logging.getLogger("kazehire").handlers.clear()
