"""Tests for kazehire.prompts package.

Tests prompt compilation:
- Determinism (same input, byte-identical output)
- Character budgets
- Ranking: opaque ids only, count rule, comments section
- Conversation and bias templates
- Payload type checking
"""

import pytest

from kazehire.core.config import PromptBudgets
from kazehire.prompts import (
    BIAS_SCHEMA_ID,
    CONVERSATION_SCHEMA_ID,
    RANKING_SCHEMA_ID,
    compile_prompt,
    compile_request,
)
from kazehire.prompts.budget import truncate
from kazehire.pydantic_models import (
    BiasPayload,
    ConversationPayload,
    ExtractedText,
    RankCandidatesPayload,
    TaskRequest,
    TaskType,
)


def _resumes(count):
    return tuple(
        ExtractedText(
            source_identifier=f"uuid-{i:04d}",
            display_name=f"Person {i}",
            text=f"Resume text for person {i}. Python, SQL.",
        )
        for i in range(1, count + 1)
    )


def _ranking_payload(count=3, comments=None, description="Build APIs in Python."):
    return RankCandidatesPayload(
        job_title="Backend Engineer",
        job_description=description,
        resumes=_resumes(count),
        comments=comments,
    )


# =============================================================================
# Budget tests
# =============================================================================


class TestTruncate:
    """Tests for truncate()."""

    def test_under_budget_unchanged(self):
        assert truncate("  short text  ", 100) == "short text"

    def test_prefix_cut(self):
        assert truncate("abcdefghij", 4) == "abcd"

    def test_none_is_empty(self):
        assert truncate(None, 10) == ""


# =============================================================================
# Ranking prompt tests
# =============================================================================


class TestRankingPrompt:
    """Tests for rank_candidates compilation."""

    def test_deterministic(self):
        first = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload())
        second = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload())
        assert first.text == second.text
        assert first.identity_map == second.identity_map
        assert first == second

    def test_schema_id(self):
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload())
        assert prompt.declared_response_schema_id == RANKING_SCHEMA_ID

    def test_real_ids_never_in_prompt(self):
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(3))
        for i in range(1, 4):
            assert f"uuid-{i:04d}" not in prompt.text
            assert f"Candidate ID: candidate_{i}" in prompt.text
            assert f"Person {i}" in prompt.text

    def test_identity_map_matches_prompt(self):
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(2))
        id_map = prompt.identity_map
        assert len(id_map) == 2
        assert id_map.resolve("candidate_1").source_identifier == "uuid-0001"
        assert id_map.resolve("candidate_2").source_identifier == "uuid-0002"

    def test_duplicate_resume_listed_once(self):
        resume = _resumes(1)[0]
        payload = RankCandidatesPayload("Engineer", "Desc", resumes=(resume, resume))
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, payload)
        assert len(prompt.identity_map) == 1
        assert "candidate_2" not in prompt.text

    def test_small_pool_asks_for_all(self):
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(3))
        assert "return ALL 3" in prompt.text
        assert "TOP 5" not in prompt.text

    def test_large_pool_asks_for_top_five(self):
        prompt = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(8))
        assert "return only the TOP 5" in prompt.text
        assert "return ALL" not in prompt.text

    def test_rules_present(self):
        text = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload()).text
        assert "at least one concern" in text
        assert "from 1 (poor fit) to 10 (ideal fit)" in text
        assert '"top_candidates"' in text
        assert '"technical_skills"' in text

    def test_comments_section(self):
        with_comments = compile_prompt(
            TaskType.RANK_CANDIDATES, _ranking_payload(comments="Prefer remote candidates")
        ).text
        without = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload()).text
        assert "## Additional Comments\n\nPrefer remote candidates" in with_comments
        assert "Additional Comments" not in without

    def test_blank_comments_omitted(self):
        text = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(comments="   ")).text
        assert "Additional Comments" not in text

    def test_job_description_truncated(self):
        long_description = "A" * (PromptBudgets.JOB_DESCRIPTION + 500)
        text = compile_prompt(TaskType.RANK_CANDIDATES, _ranking_payload(description=long_description)).text
        assert "A" * PromptBudgets.JOB_DESCRIPTION in text
        assert "A" * (PromptBudgets.JOB_DESCRIPTION + 1) not in text

    def test_resume_truncated(self):
        resume = ExtractedText("uuid-1", "Person", "R" * (PromptBudgets.RESUME + 100))
        payload = RankCandidatesPayload("Engineer", "Desc", resumes=(resume,))
        text = compile_prompt(TaskType.RANK_CANDIDATES, payload).text
        assert "R" * PromptBudgets.RESUME in text
        assert "R" * (PromptBudgets.RESUME + 1) not in text


# =============================================================================
# Conversation and bias prompt tests
# =============================================================================


class TestConversationPrompt:
    """Tests for summarize_conversation compilation."""

    def test_contains_transcript_and_rules(self):
        prompt = compile_prompt(
            TaskType.SUMMARIZE_CONVERSATION,
            ConversationPayload("Recruiter: When can you start?\nCandidate: March 1st, 2025."),
        )
        assert prompt.declared_response_schema_id == CONVERSATION_SCHEMA_ID
        assert prompt.identity_map is None
        assert "Candidate: March 1st, 2025." in prompt.text
        assert "YYYY-MM-DD" in prompt.text
        assert "use null" in prompt.text
        assert '"interest_level"' in prompt.text

    def test_transcript_truncated(self):
        transcript = "t" * (PromptBudgets.TRANSCRIPT + 10)
        text = compile_prompt(TaskType.SUMMARIZE_CONVERSATION, ConversationPayload(transcript)).text
        assert "t" * (PromptBudgets.TRANSCRIPT + 1) not in text

    def test_deterministic(self):
        payload = ConversationPayload("Candidate: I expect 90k.")
        assert compile_prompt(TaskType.SUMMARIZE_CONVERSATION, payload) == compile_prompt(
            TaskType.SUMMARIZE_CONVERSATION, payload
        )


class TestBiasPrompt:
    """Tests for detect_bias compilation."""

    def test_contains_feedback_and_empty_answer(self):
        prompt = compile_prompt(TaskType.DETECT_BIAS, BiasPayload("Strong SQL, but seemed too old."))
        assert prompt.declared_response_schema_id == BIAS_SCHEMA_ID
        assert "Strong SQL, but seemed too old." in prompt.text
        assert '{"flags": []}' in prompt.text
        assert '"justification"' in prompt.text


class TestCompiler:
    """Tests for compile_prompt() / compile_request()."""

    def test_mismatched_payload_raises(self):
        with pytest.raises(TypeError):
            compile_prompt(TaskType.DETECT_BIAS, ConversationPayload("hello"))

    def test_compile_request(self):
        request = TaskRequest(TaskType.DETECT_BIAS, BiasPayload("Great communicator."))
        assert compile_request(request) == compile_prompt(TaskType.DETECT_BIAS, BiasPayload("Great communicator."))
