#!/usr/bin/env python3
"""
Main entry point for the AHP Decision Service.
"""

import argparse
import json
import sys
from pathlib import Path

from ahp_service.logging_config import configure_logging, get_logger


def run_api():
    """Start the FastAPI server."""
    import uvicorn
    from ahp_service.config import settings

    uvicorn.run(
        "ahp_service.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


def evaluate(path: str, as_json: bool = False) -> int:
    """
    Evaluate an AHP problem stored in a JSON file.

    The file uses the same layout as the POST /ahp/evaluate request body.

    Returns:
        Process exit code (0 on success, 1 on a validation failure)
    """
    from pydantic import ValidationError

    from ahp_service.modules.ahp_core import AHPError, EvaluationRequestSchema, get_orchestrator

    log = get_logger(__name__)

    try:
        request = EvaluationRequestSchema.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except ValidationError as e:
        log.error("invalid_request_file", path=path, errors=e.error_count())
        print(f"Invalid request file {path}:\n{e}", file=sys.stderr)
        return 1
    except OSError as e:
        log.error("unreadable_request_file", path=path, error=str(e))
        print(f"Cannot read request file {path}: {e.strerror or e}", file=sys.stderr)
        return 1

    try:
        response = get_orchestrator().rank_alternatives(request)
    except AHPError as e:
        log.warning("evaluation_rejected", error_code=e.error_code.value, stage=e.stage.value)
        print(e.message, file=sys.stderr)
        return 1

    log.info("evaluation_complete", alternatives=len(response.ranking))

    if as_json:
        print(response.model_dump_json(indent=2))
        return 0

    print(f"Criteria CR: {response.criteria_consistency_ratio:.2f}")
    for criterion, cr in response.alternative_consistency_ratios.items():
        print(f'Alternatives under "{criterion}" CR: {cr:.2f}')
    print()
    print(f"{'Rank':<6}{'Alternative':<30}{'Score':>10}")
    for item in response.ranking:
        print(f"{item.rank:<6}{item.name:<30}{item.score:>10.4f}")

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="AHP Decision Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  api       Start the FastAPI server
  evaluate  Rank the alternatives of a JSON problem file

Examples:
  python main.py api
  python main.py evaluate problem.json
  python main.py evaluate problem.json --json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("api", help="Start the FastAPI server")

    evaluate_parser = subparsers.add_parser("evaluate", help="Evaluate a JSON problem file")
    evaluate_parser.add_argument("file", help="Path to the problem file")
    evaluate_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    evaluate_parser.add_argument("--log-level", default=None, help="Override the log level")

    args = parser.parse_args()

    # Configure logging
    if args.command == "evaluate":
        configure_logging(log_level=args.log_level or "WARNING", log_format="console")
        sys.exit(evaluate(args.file, as_json=args.json))
    else:
        configure_logging()
        run_api()


if __name__ == "__main__":
    main()
