"""
CLI Entry Point for headline analysis.

Usage:
    python -m src.headlines --text "AI chip boom lifts Nvidia and rivals"
    python -m src.headlines --input headlines.json --markets-only
    python -m src.headlines --input headlines.json --config configs/headlines.yaml --json
"""

import argparse
import json
import logging
import sys
from typing import Optional

import yaml

import config
from utils import setup_logging

logger = logging.getLogger(__name__)


def load_config(config_path: Optional[str]) -> dict:
    """Load configuration from YAML file."""
    if not config_path:
        return {}
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def build_pipeline(cfg: dict):
    """Create a pipeline with YAML overrides applied."""
    from .extractor import EntityExtractor
    from .pipeline import HeadlinePipeline

    extractor = EntityExtractor(
        weak_keyword_min_hits=int(cfg.get('weak_keyword_min_hits', config.WEAK_KEYWORD_MIN_HITS)),
    )
    return HeadlinePipeline(extractor=extractor)


def format_analysis(analysis) -> str:
    """One human-readable line per headline."""
    symbols = ", ".join(f"{m.symbol}({m.kind.value})" for m in analysis.matches) or "-"
    flag = "KEEP" if analysis.keep else "HIDE"
    impact = f" [{analysis.impact.value}]" if analysis.impact else ""
    return (
        f"{flag}  {analysis.topic.label:<11} {symbols:<24} "
        f"{analysis.record.text}{impact}\n      {analysis.decision.reason}"
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze news headlines for market relevance and instruments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.headlines --text "Bank of America raised guidance"
    Analyze a single headline

  python -m src.headlines --text "Chipmakers rally" --related NVDA,AMD
    Pass the feed's related-symbols hint

  python -m src.headlines --input headlines.json --markets-only --json
    Batch analysis, hidden headlines dropped, JSON output
        """
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        '--input', '-i',
        type=str,
        help='Path to JSON array of feed records'
    )
    source.add_argument(
        '--text', '-t',
        type=str,
        help='Single headline text'
    )

    parser.add_argument(
        '--related', '-r',
        type=str,
        default='',
        help='Comma-separated related symbols (with --text)'
    )
    parser.add_argument(
        '--category',
        type=str,
        default='',
        help='Feed category (with --text)'
    )
    parser.add_argument(
        '--markets-only',
        action='store_true',
        help='Drop headlines without a market signal'
    )
    parser.add_argument(
        '--config', '-c',
        type=str,
        default=None,
        help='Optional YAML overrides'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print JSON instead of text'
    )
    parser.add_argument(
        '--log-level', '-l',
        default=config.LOG_LEVEL,
        help='Logging level'
    )

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    cfg = load_config(args.config)
    pipeline = build_pipeline(cfg)

    from .pipeline import mentioned_symbols

    if args.text is not None:
        records = [{"text": args.text, "related_symbols": args.related, "category": args.category}]
        analyses, stats = pipeline.process(records, markets_only=args.markets_only)
    else:
        analyses, stats = pipeline.load_from_json(args.input, markets_only=args.markets_only)

    limit = int(cfg.get('mentioned_symbols_limit', config.MENTIONED_SYMBOLS_LIMIT))
    mentioned = mentioned_symbols(analyses, limit=limit)

    if args.json:
        print(json.dumps({
            "analyses": [a.to_dict() for a in analyses],
            "stats": stats.to_dict(),
            "mentioned_symbols": [{"symbol": s, "count": c} for s, c in mentioned],
        }, indent=2))
        return 0

    for analysis in analyses:
        print(format_analysis(analysis))
    print()
    print(f"Headlines: {stats.total_headlines}  kept: {stats.kept_headlines}  hidden: {stats.hidden_headlines}")
    if mentioned:
        print("Mentioned: " + "  ".join(f"{s} x{c}" for s, c in mentioned))
    return 0


if __name__ == "__main__":
    sys.exit(main())
