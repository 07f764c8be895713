"""Prompt for flagging potentially biased language in interview feedback."""

from kazehire.core.config import PromptBudgets
from kazehire.prompts.budget import truncate
from kazehire.pydantic_models.task_models import BiasPayload

BIAS_SCHEMA_ID = "detect_bias.v1"

BIAS_RESPONSE_SCHEMA = """{
  "flags": [
    {
      "term": "<exact word or phrase from the feedback>",
      "justification": "<why this wording may reflect bias>"
    }
  ]
}"""

BIAS_PROMPT = """You are a fair-hiring reviewer checking an interviewer's written feedback for biased language.

## Objective

Find words or phrases that judge the candidate on something other than job-relevant skills and behavior.

## What Counts as Bias

- Gender, age, race, ethnicity, nationality or accent
- Religion, disability, health, pregnancy, marital or family status
- Appearance or personal style
- Vague "culture fit" judgments not tied to observable behavior

Job-relevant criticism (missing skills, weak answers, poor communication of technical ideas) is NOT bias.

## Feedback

{feedback}

## Rules

1. **Exact terms**: "term" must be copied exactly from the feedback.
2. **Justify**: every flag needs a short "justification".
3. **No bias found**: return {{"flags": []}}. An empty list is a valid answer.

## Output Format

Respond with ONLY this JSON structure and nothing else:
{schema}"""


def build_bias_prompt(payload: BiasPayload) -> str:
    """Build the bias detection prompt.

    Args:
        payload: The feedback text to review.

    Returns:
        Formatted prompt.
    """
    return BIAS_PROMPT.format(
        feedback=truncate(payload.feedback_text, PromptBudgets.FEEDBACK),
        schema=BIAS_RESPONSE_SCHEMA,
    )
