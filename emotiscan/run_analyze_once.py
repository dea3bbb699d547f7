from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from emotiscan.analysis_pipeline import AnalysisError, AnalysisOrchestrator
from emotiscan.languages import TARGET_LANGUAGES
from emotiscan.settings import load_settings

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze emotions and sentiment of a text.")
    parser.add_argument("text", nargs="*", help="text to analyze (read from stdin when omitted)")
    parser.add_argument(
        "--lang",
        default=None,
        choices=sorted(TARGET_LANGUAGES),
        help="target language passed along with the results: "
        + ", ".join(f"{lang.code} ({lang.name})" for lang in TARGET_LANGUAGES.values()),
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    text = " ".join(args.text) if args.text else sys.stdin.read().strip()

    s = load_settings()
    orchestrator = AnalysisOrchestrator.from_settings(s)

    try:
        analyzed = orchestrator.analyze_text(text, target_language=args.lang)
    except AnalysisError as e:
        logger.error("Could not analyze text: %s", e)
        return 1

    print(json.dumps(analyzed.to_dict(), ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
