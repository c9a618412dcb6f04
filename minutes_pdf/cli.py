"""Command-line interface for rendering Minutes of Meeting PDFs."""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .core.exceptions import AppError
from .core.logger import get_logger
from .services.composer import Requester, build_minutes_report, compose_report
from .services.records import load_meeting, load_minutes

log = get_logger("cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minutes-pdf",
        description="Render a Minutes of Meeting PDF from a meeting/minutes JSON record",
    )
    parser.add_argument("command", choices=["render"], help="Command to execute")
    parser.add_argument(
        "--in", "--input",
        dest="input_path",
        required=True,
        type=Path,
        help='JSON file holding {"meeting": {...}, "minutes": {...}}',
    )
    parser.add_argument(
        "--out", "--output",
        dest="output_dir",
        required=True,
        type=Path,
        help="Directory the PDF is written to",
    )
    parser.add_argument("--user-id", default="", help="Requesting user id (for private meetings)")
    parser.add_argument("--role", default="", help="Requesting user role")
    parser.add_argument("--name", default=None, help="Requesting user display name")
    parser.add_argument(
        "--no-auth",
        action="store_true",
        help="Skip the private-meeting access check",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        payload = json.loads(args.input_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Error: cannot read {args.input_path}: {e}")
        return 1
    if not isinstance(payload, dict) or not isinstance(payload.get("meeting"), dict):
        print('❌ Error: input must be an object with a "meeting" record')
        return 1

    try:
        meeting = load_meeting(payload["meeting"])
        minutes = load_minutes(payload.get("minutes"))
        if args.no_auth:
            report = compose_report(meeting, minutes)
        else:
            requester = Requester(user_id=args.user_id, role=args.role, name=args.name)
            report = build_minutes_report(meeting, minutes, requester)
    except AppError as e:
        log.error("Render refused: %s", e)
        print(f"❌ {type(e).__name__}: {e}")
        return 1

    args.output_dir.mkdir(parents=True, exist_ok=True)
    out_path = args.output_dir / report.filename
    out_path.write_bytes(report.content)
    print(f"✅ Report created: {out_path}")
    print(f"   Pages: {report.page_count}")
    print(f"   Participants: {len(report.participants)}")
    print(f"   Action items: {len(report.action_items)}")
    if report.truncated_sections:
        print(f"   Truncated: {', '.join(report.truncated_sections)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
