"""Command-line interface for mamma-me."""

import argparse
import json
import logging
import sys

from mamma_me import __version__
from mamma_me.core import open_engine, request_advisory
from mamma_me.dataset.repository import DatasetConfig
from mamma_me.exceptions import MammaMeError
from mamma_me.schema import FoodSummary
from mamma_me.search.engine import SearchConfig
from mamma_me.search.types import SearchResult
from mamma_me.summary import build_reliability_summary, tri_group_signals, verdict_label


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {number}")
    return number


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="mamma-me",
        description="Look up whether a food is safe during pregnancy",
    )
    parser.add_argument("query", help="Food name or free-text question")
    parser.add_argument("--foods", help="Food CSV path or URL (default: MAMMA_ME_FOODS_PATH or bundled data)")
    parser.add_argument("--synonyms", help="Synonym CSV path or URL (default: MAMMA_ME_SYNONYMS_PATH or bundled data)")
    parser.add_argument("--limit", type=_positive_int, default=5, help="Maximum results to show")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--advise",
        action="store_true",
        help="Ask the advisory provider when there is no strong match",
    )
    parser.add_argument("--provider", help="Advisory provider (`http` or `gemini`)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--version",
        action="version",
        version=f"mamma-me {__version__}",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    env_config = DatasetConfig.from_env()
    dataset_config = DatasetConfig(
        foods_source=args.foods or env_config.foods_source,
        synonyms_source=args.synonyms or env_config.synonyms_source,
        timeout_sec=env_config.timeout_sec,
    )

    try:
        engine = open_engine(dataset_config, SearchConfig(limit=args.limit))
        result = engine.search(args.query)
    except MammaMeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    advisory = None
    if args.advise and result.show_advisory:
        advisory = request_advisory(args.query, provider=args.provider)

    if args.json:
        payload = result.model_dump(mode="json")
        if advisory is not None:
            payload["advisory"] = advisory.model_dump(mode="json")
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_formatted(result)
        if advisory is not None:
            print("  AI Recommendation")
            print()
            print(f"  {advisory.text}")
            print()
            print("  ※ AI responses are for reference only. Please consult a professional.")
            print()

    return 0


def _print_formatted(result: SearchResult) -> None:
    """Print results in human-readable format."""
    print()
    print("  mamma-me")
    print()

    if not result.results:
        print("  No results found.")
        print()
        return

    for summary in result.results:
        _print_summary(summary)


def _print_summary(summary: FoodSummary) -> None:
    print(f"  {summary.name}  (score {summary.weighted_score:.1f}/3, {summary.count} sources)")
    text = build_reliability_summary(summary.entries)
    if text:
        print(f"    {text}")
    for group in tri_group_signals(summary.entries):
        print(f"    {group.signal.icon} {group.title + ':':<28} {group.signal.label}")
    for entry in summary.entries:
        source = entry.source_name or "-"
        print(f"      - {verdict_label(entry.verdict):<12} {source} ({entry.reliability:.1f})")
    print()


if __name__ == "__main__":
    sys.exit(main())
