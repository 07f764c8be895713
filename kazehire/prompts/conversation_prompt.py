"""Prompt for extracting hiring details from a conversation transcript."""

from kazehire.core.config import ConversationConfig, PromptBudgets
from kazehire.prompts.budget import truncate
from kazehire.pydantic_models.task_models import ConversationPayload

CONVERSATION_SCHEMA_ID = "summarize_conversation.v1"

CONVERSATION_RESPONSE_SCHEMA = """{
  "start_date": "<YYYY-MM-DD>" | null,
  "end_date": "<YYYY-MM-DD>" | null,
  "min_salary": <number> | null,
  "max_salary": <number> | null,
  "interest_level": <integer 1-5> | null,
  "summary_text": "<2-3 sentence neutral summary>" | null
}"""

CONVERSATION_PROMPT = """You are a recruiting assistant that reads a conversation between a recruiter and a candidate and records the hiring details it mentions.

## Objective

Extract the candidate's availability, salary expectations and interest level, and summarize the conversation.

## Transcript

{transcript}

## Rules

1. **Only what is said**: use null for anything the transcript does not state. Never guess or infer.
2. **Dates**: "start_date" is when the candidate can start, "end_date" is when their availability ends. Use YYYY-MM-DD. If a date is relative or ambiguous (e.g. "next month"), use null.
3. **Salary**: plain non-negative numbers without currency symbols or separators. If one figure is given, use it for both "min_salary" and "max_salary".
4. **Interest level**: an integer from {interest_min} (not interested) to {interest_max} (very interested), only if the candidate's interest is clear.
5. **Summary**: "summary_text" is a short, neutral summary of the conversation.

## Output Format

Respond with ONLY this JSON structure and nothing else:
{schema}"""


def build_conversation_prompt(payload: ConversationPayload) -> str:
    """Build the conversation extraction prompt.

    Args:
        payload: The transcript to read.

    Returns:
        Formatted prompt.
    """
    return CONVERSATION_PROMPT.format(
        transcript=truncate(payload.transcript, PromptBudgets.TRANSCRIPT),
        interest_min=ConversationConfig.INTEREST_MIN,
        interest_max=ConversationConfig.INTEREST_MAX,
        schema=CONVERSATION_RESPONSE_SCHEMA,
    )
