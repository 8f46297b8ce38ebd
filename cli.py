import argparse
import json
import sys
from pathlib import Path

import requests

from core import config
from core.logging_setup import setup_console_logging
from core.pending_queue import PendingQueue
from core.report_sink import ReportSink

setup_console_logging()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Take quizzes from a quiz server")
    parser.add_argument(
        "--server",
        default=config.API_URL,
        help="Base URL of the quiz API",
    )
    parser.add_argument(
        "--pending",
        type=Path,
        default=config.PENDING_PATH,
        help="File holding reports that still need to be sent",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    take = subparsers.add_parser("take", help="Open the quiz window")
    take.add_argument("quiz_id", help="Quiz identifier")
    take.add_argument(
        "--username",
        default=config.USERNAME,
        help="Name the report is saved under (defaults to QUIZ_USERNAME)",
    )
    take.add_argument(
        "--no-fullscreen",
        action="store_true",
        help="Start windowed instead of fullscreen",
    )

    subparsers.add_parser("flush-pending", help="Retry reports saved locally")

    import_quiz = subparsers.add_parser("import-quiz", help="Upload a quiz JSON file")
    import_quiz.add_argument("file", type=Path, help="Path to quiz .json file")
    args = parser.parse_args(argv)
    if args.command == "take":
        args.username = (args.username or "").strip()
        if not args.username:
            # the reports API answers 400 without a username
            parser.error("take requires --username or QUIZ_USERNAME")
    return args


def _make_sink(args: argparse.Namespace) -> ReportSink:
    return ReportSink(args.server, PendingQueue(args.pending))


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.command == "take":
        from app.main import run_quiz_window

        run_quiz_window(
            args.quiz_id,
            args.server,
            args.username,
            _make_sink(args),
            fullscreen=not args.no_fullscreen,
        )
        return 0

    if args.command == "flush-pending":
        sink = _make_sink(args)
        delivered = sink.flush_pending()
        print(f"Delivered {delivered} pending reports, {len(sink.pending_queue)} left")
        return 0

    if args.command == "import-quiz":
        payload = json.loads(args.file.read_text(encoding="utf-8"))
        try:
            response = requests.post(
                f"{args.server.rstrip('/')}/api/quizzes",
                json=payload,
                timeout=config.REQUEST_TIMEOUT,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            print(f"Could not upload quiz: {exc}", file=sys.stderr)
            return 1
        print(f"Created quiz {response.json().get('_id')}")
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
