"""Command-line interface for the Research Credibility Analyzer."""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .analyzer import DEFAULT_MODELS, PROVIDERS, ResearchAnalyzer
from .errors import AnalysisError, DuplicateBookmarkError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def main():
    parser = argparse.ArgumentParser(
        description="Classify a research document, assess it with a type- and field-adapted credibility framework, and report bias, findings and perspective.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--file", "-f",
        type=Path,
        help="Local document to analyze (text or PDF)."
    )
    mode_group.add_argument(
        "--query", "-q",
        help="Search OpenAlex for papers. Lists results unless --result-index selects one to analyze."
    )
    mode_group.add_argument(
        "--insights",
        action="store_true",
        help="Generate insights reports over all bookmarked analyses."
    )

    parser.add_argument("--author", help="Restrict the search to works by this author")
    parser.add_argument(
        "--result-index",
        type=int,
        help="Zero-based index of the search result to analyze"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of search results"
    )
    parser.add_argument(
        "--provider",
        choices=PROVIDERS,
        default="anthropic",
        help="LLM provider used for the assessment"
    )
    parser.add_argument(
        "--model",
        help=f"Model name (defaults: {', '.join(f'{k}={v}' for k, v in DEFAULT_MODELS.items())})"
    )
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=4000,
        help="Maximum tokens for the LLM reply"
    )
    parser.add_argument(
        "--always-recompute-rating",
        action="store_true",
        help="Derive the rating from the total score even when the model supplied one"
    )
    parser.add_argument(
        "--bookmark",
        action="store_true",
        help="Bookmark the analysis result"
    )
    parser.add_argument("--notes", help="Notes to store with the bookmark")
    parser.add_argument(
        "--bookmarks-file",
        type=Path,
        help="Bookmarks JSON file (defaults to <output-dir>/bookmarks.json)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        default=Path("./results"),
        help="Directory for saved analyses and insights reports"
    )
    parser.add_argument(
        "--no-full-text",
        action="store_true",
        help="Do not download open-access PDFs for search results; assess from the abstract"
    )
    parser.add_argument("--anthropic-key", help="Anthropic API key (uses ANTHROPIC_API_KEY env var if not provided)")
    parser.add_argument("--openai-key", help="OpenAI API key (uses OPENAI_API_KEY env var if not provided)")

    args = parser.parse_args()

    if args.max_tokens < 1:
        parser.error("--max-tokens must be a positive integer")
    if args.limit < 1:
        parser.error("--limit must be a positive integer")
    if args.result_index is not None and args.query is None:
        parser.error("--result-index requires --query")
    if args.result_index is not None and args.result_index < 0:
        parser.error("--result-index must not be negative")
    if args.file is not None and not args.file.is_file():
        parser.error(f"File not found: {args.file}")

    load_dotenv()

    try:
        analyzer = ResearchAnalyzer(
            provider=args.provider,
            model=args.model,
            anthropic_key=args.anthropic_key,
            openai_key=args.openai_key,
            max_tokens=args.max_tokens,
            always_recompute_rating=args.always_recompute_rating,
            output_dir=args.output_dir,
            bookmarks_file=args.bookmarks_file,
        )

        if args.insights:
            report = analyzer.generate_insights()
            if report is None:
                sys.exit(1)
            _print_json(report["summary"])
            sys.exit(0)

        if args.query is not None:
            papers = analyzer.search(args.query, author=args.author, limit=args.limit)
            if args.result_index is None:
                _print_json([p.model_dump(mode='json', by_alias=True) for p in papers])
                sys.exit(0)
            if args.result_index >= len(papers):
                logger.error(f"Result index {args.result_index} out of range ({len(papers)} results)")
                sys.exit(1)
            result = analyzer.analyze_paper(papers[args.result_index], fetch_full_text=not args.no_full_text)
        else:
            result = analyzer.analyze_file(args.file)

        analyzer.save_result(result)
        if args.bookmark:
            try:
                analyzer.bookmark(result, args.notes)
            except DuplicateBookmarkError as e:
                logger.warning(str(e))
        _print_json(result.model_dump(mode='json', by_alias=True))

    except AnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        _print_json(e.to_dict())
        sys.exit(2)
    except ValueError as e:
        logger.error(f"Initialization Error: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"I/O Error: {e}")
        sys.exit(1)

    logger.info("Analysis finished successfully.")
    sys.exit(0)


if __name__ == "__main__":
    main()
