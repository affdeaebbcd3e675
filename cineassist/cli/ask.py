"""Command-line access to the search and assistant services.

Usage::

    python -m cineassist.cli search "matrix" --page 2
    python -m cineassist.cli ask "um drama cerebral dos anos 80" --json

Both commands build the same services the HTTP server uses (TMDB
provider, in-memory cache, optional OpenAI completion) around a private
HTTP client and exit with 0 on success, 1 on a handled error.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx

from cineassist.models.assistant import AssistantAnswer
from cineassist.models.movie import AggregatedPage
from cineassist.utils.errors import CineAssistError
from cineassist.utils.logging import configure_logging

# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------


def _movie_line(item: dict[str, Any]) -> str:
    title = item.get("title") or item.get("name") or "?"
    year = (item.get("release_date") or "")[:4]
    rating = item.get("vote_average")
    parts = [f"[{item.get('id')}]", f"{title} ({year})" if year else title]
    if rating is not None:
        parts.append(f"nota {rating}")
    return "  ".join(parts)


def format_search(result: AggregatedPage) -> str:
    lines = [
        f"Página {result.page}/{result.total_pages} ({result.total_results} resultados)",
        "",
    ]
    lines.extend(_movie_line(item) for item in result.results)
    return "\n".join(lines)


def format_answer(result: AssistantAnswer) -> str:
    lines = [result.answer, ""]
    for source in result.sources:
        year = (source.release_date or "")[:4]
        lines.append(f"  - {source.title} ({year})" if year else f"  - {source.title}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


async def _run(args: argparse.Namespace) -> int:
    # Deferred import: cineassist.main builds settings and the FastAPI app.
    from cineassist.main import build_services, settings

    # Logs always go to stderr; stdout carries only the command output.
    quiet = args.quiet or args.json_output
    configure_logging(log_level="WARNING" if quiet else settings.log_level, stream=sys.stderr)

    async with httpx.AsyncClient(timeout=30.0) as http_client:
        services = build_services(settings, http_client)
        try:
            if args.command == "search":
                result = await services["search_service"].search(args.query, args.page)
                text = format_search(result)
            else:
                result = await services["assistant_service"].answer(args.query)
                text = format_answer(result)
        except CineAssistError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    if args.json_output:
        print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        print(text)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m cineassist.cli",
        description="Search TMDB through the fallback cascade or ask the movie assistant.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Print the raw result as JSON.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings.",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    search = subcommands.add_parser("search", help="One-shot movie search.")
    search.add_argument("query", help="Free-text query.")
    search.add_argument("--page", type=int, default=1, help="1-indexed result page (20 per page).")

    ask = subcommands.add_parser("ask", help="Ask the assistant for suggestions.")
    ask.add_argument("query", help="What you feel like watching.")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv* and run the selected command; returns the exit code."""
    args = _build_parser().parse_args(argv)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
