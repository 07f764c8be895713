"""Decode raw model output into a JSON object.

Models often wrap JSON in a markdown code fence, with or without a language
tag. The fence is stripped before parsing. Anything that still fails to parse
raises ResponseFormatError; no repair is attempted, so partial output is
never passed on as if it were complete. NaN, Infinity and numbers too large
for a float are rejected as well.
"""

import json
import logging
import math
import re
from typing import Any

from kazehire.core.errors import ResponseFormatError

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?(?P<body>.*?)\s*```$", re.DOTALL)

_EXCERPT_CHARS = 500


def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number {literal} is out of range")
    return value


def strip_code_fence(raw_text: str) -> str:
    """Trim whitespace and remove a surrounding ``` fence if present."""
    text = raw_text.strip()
    match = _FENCE.match(text)
    if match:
        text = match.group("body").strip()
    return text


def decode(raw_text: str) -> dict[str, Any]:
    """Parse model output as a JSON object.

    Args:
        raw_text: Completion text exactly as the provider returned it.

    Returns:
        The parsed top-level JSON object.

    Raises:
        ResponseFormatError: If the text is not JSON or not a JSON object.
    """
    text = strip_code_fence(raw_text)
    try:
        payload = json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
    except json.JSONDecodeError as e:
        logger.debug("Undecodable model output: %.200s", raw_text)
        raise ResponseFormatError(
            f"Model output is not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})",
            raw_excerpt=raw_text[:_EXCERPT_CHARS],
        ) from e
    except ValueError as e:
        raise ResponseFormatError(
            f"Model output is not valid JSON: {e}",
            raw_excerpt=raw_text[:_EXCERPT_CHARS],
        ) from e

    if not isinstance(payload, dict):
        raise ResponseFormatError(
            f"Expected a JSON object, got {type(payload).__name__}",
            raw_excerpt=raw_text[:_EXCERPT_CHARS],
        )
    return payload
