"""CLI entrypoint for the recruitment AI tasks.

This is also where credentials enter the system: providers are built from
environment variables (and a .env file) here, never inside the core.
"""

import argparse
import asyncio
import json
import logging
import os
import sys
import warnings
from collections.abc import Mapping
from pathlib import Path

import litellm
from dotenv import load_dotenv

from kazehire.core.config import (
    API_BASE_ENV_VARS,
    API_KEY_ENV_VARS,
    DEFAULT_MODELS,
    DEFAULT_PROVIDER_ORDER,
    OPENROUTER_HEADERS,
)
from kazehire.core.llm_client import ProviderConfig
from kazehire.orchestrator import Orchestrator, TaskFailure
from kazehire.pydantic_models import CandidateDocument

warnings.filterwarnings("ignore", message="Pydantic serializer warnings")
warnings.filterwarnings("ignore", category=ResourceWarning)

# Suppress noisy loggers (HTTP clients, LiteLLM internals)
for logger_name in ["httpx", "httpcore", "litellm", "LiteLLM", "aiohttp", "asyncio"]:
    logging.getLogger(logger_name).setLevel(logging.ERROR)

PROVIDER_ORDER_ENV_VAR = "KAZEHIRE_PROVIDERS"
"""Comma-separated provider order override, e.g. "gemini,openrouter"."""

MODEL_ENV_VARS = {
    "openrouter": "OPEN_ROUTER_MODEL",
    "gemini": "GEMINI_MODEL",
}

APP_URL_ENV_VAR = "NEXT_PUBLIC_BASE_URL"


def providers_from_env(env: Mapping[str, str] | None = None) -> list[ProviderConfig]:
    """Build the ordered provider list from environment variables.

    Providers without an API key are skipped.

    Args:
        env: Variables to read; defaults to os.environ.

    Returns:
        ProviderConfig list in preference order (possibly empty).
    """
    env = os.environ if env is None else env

    order_override = env.get(PROVIDER_ORDER_ENV_VAR, "")
    order = [p.strip() for p in order_override.split(",") if p.strip()] or list(DEFAULT_PROVIDER_ORDER)

    providers = []
    for provider_id in order:
        if provider_id not in API_KEY_ENV_VARS:
            print(f"Warning: unknown provider '{provider_id}' in {PROVIDER_ORDER_ENV_VAR}", file=sys.stderr)
            continue

        api_key = env.get(API_KEY_ENV_VARS[provider_id], "")
        if not api_key:
            continue

        headers = {}
        if provider_id == "openrouter":
            headers = {
                **OPENROUTER_HEADERS,
                "HTTP-Referer": env.get(APP_URL_ENV_VAR, "http://localhost:3000"),
            }

        providers.append(
            ProviderConfig(
                provider_id=provider_id,
                model=env.get(MODEL_ENV_VARS[provider_id], DEFAULT_MODELS[provider_id]),
                api_key=api_key,
                api_base=env.get(API_BASE_ENV_VARS[provider_id]) or None,
                extra_headers=headers,
            )
        )
    return providers


def _read_text(value: str) -> str:
    """Return the contents of value if it names a file, else value itself."""
    path = Path(value)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return value


def _load_documents(paths: list[str]) -> list[CandidateDocument]:
    documents = []
    for raw in paths:
        path = Path(raw)
        if not path.is_file():
            print(f"Warning: skipping missing file {path}", file=sys.stderr)
            continue
        documents.append(
            CandidateDocument(
                source_identifier=path.name,
                raw_bytes=path.read_bytes(),
                display_name=path.name,
            )
        )
    return documents


async def run(args: argparse.Namespace) -> dict | list | None:
    """Run the selected task and return its JSON-ready result."""
    providers = providers_from_env()
    if not providers:
        names = ", ".join(API_KEY_ENV_VARS[p] for p in DEFAULT_PROVIDER_ORDER)
        print(f"Error: no provider configured. Set one of: {names}", file=sys.stderr)
        return None

    orchestrator = Orchestrator(providers=providers, verbose=args.verbose, log_dir=args.log_dir)

    try:
        if args.command == "rank":
            ranking = await orchestrator.rank_candidates(
                job_title=args.title,
                job_description=_read_text(args.description),
                candidate_documents=_load_documents(args.resumes),
                comments=args.comments,
            )
            return [entry.model_dump(mode="json") for entry in ranking]

        if args.command == "summarize":
            extraction = await orchestrator.summarize_conversation(_read_text(args.transcript))
            return extraction.model_dump(mode="json")

        flags = await orchestrator.detect_bias(_read_text(args.feedback))
        return {"flags": [flag.model_dump(mode="json") for flag in flags]}

    except TaskFailure as e:
        # Only the classified kind is shown; details are in the log
        print(f"Error: {e.task} failed: {e.kind.value}", file=sys.stderr)
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kazehire",
        description="Rank resumes, summarize candidate chats, and check feedback for bias.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logs")
    parser.add_argument("--log-dir", default=None, help="Directory for log files")
    parser.add_argument("-o", "--output", default=None, help="Write the JSON result to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    rank = sub.add_parser("rank", help="Rank resumes (PDF) against a job opening")
    rank.add_argument("--title", required=True, help="Job title")
    rank.add_argument("--description", required=True, help="Job description text or a file containing it")
    rank.add_argument("--comments", default=None, help="Additional comments for the ranking")
    rank.add_argument("resumes", nargs="+", help="Resume PDF files")

    summarize = sub.add_parser("summarize", help="Extract hiring details from a chat transcript")
    summarize.add_argument("transcript", help="Transcript text or a file containing it")

    bias = sub.add_parser("bias", help="Flag biased language in interview feedback")
    bias.add_argument("feedback", help="Feedback text or a file containing it")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    load_dotenv()
    litellm.suppress_debug_info = True

    args = build_parser().parse_args(argv)
    result = asyncio.run(run(args))
    if result is None:
        return 1

    output = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
        print(f"Saved: {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
