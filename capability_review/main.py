"""
Capability Review — reviewer command line.

    python -m capability_review list [--user USERNAME]
    python -m capability_review show ID
    python -m capability_review submit FILE --by ID --username NAME
    python -m capability_review decide ID approve|reject --by ID [--name NAME] [--remark TEXT]
    python -m capability_review stats

Or import and use the store programmatically:
    from capability_review import SubmissionService
    store = SubmissionService()
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from capability_review.config import get_settings
from capability_review.models.enums import SubmissionStatus
from capability_review.models.schemas import Submission
from capability_review.services.submission_service import SubmissionService
from capability_review.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def _format_row(submission: Submission) -> str:
    created = submission.created_at.isoformat() if submission.created_at else "-"
    return (
        f"{submission.id}  {submission.status.value:<8}  {created}  "
        f"{submission.company_name or '-'}  ({submission.submitted_by_username or '-'})"
    )


def _print_json(submission: Submission) -> None:
    print(json.dumps(submission.to_wire(), indent=2, ensure_ascii=False))


def _cmd_list(store: SubmissionService, args: argparse.Namespace) -> int:
    if args.user is not None:
        items = store.list_submissions_by_user(args.user)
    else:
        items = store.list_submissions()
    for item in items:
        print(_format_row(item))
    return 0


def _cmd_show(store: SubmissionService, args: argparse.Namespace) -> int:
    submission = store.get_submission(args.id)
    if submission is None:
        print(f"Submission {args.id} not found", file=sys.stderr)
        return 1
    _print_json(submission)
    return 0


def _cmd_submit(store: SubmissionService, args: argparse.Namespace) -> int:
    try:
        payload = json.loads(Path(args.file).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"Cannot read {args.file}: {e}", file=sys.stderr)
        return 2
    if not isinstance(payload, dict):
        print(f"{args.file} must contain a JSON object", file=sys.stderr)
        return 2
    submission = store.create_submission(payload, args.by, args.username)
    _print_json(submission)
    return 0


def _cmd_decide(store: SubmissionService, args: argparse.Namespace) -> int:
    try:
        status = SubmissionStatus.parse(args.action)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    submission = store.decide(args.id, status, args.remark, args.by, args.name)
    if submission is None:
        print(f"Submission {args.id} not found", file=sys.stderr)
        return 1
    _print_json(submission)
    return 0


def _cmd_stats(store: SubmissionService, args: argparse.Namespace) -> int:
    for status, count in store.count_by_status().items():
        print(f"{status.value:<8} {count}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="capability_review",
        description="Review company capability submissions",
    )
    parser.add_argument("--storage", help="Path to the submissions JSON file")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List submissions, newest first")
    p_list.add_argument("--user", help="Only submissions by this username")
    p_list.set_defaults(handler=_cmd_list)

    p_show = sub.add_parser("show", help="Print one submission")
    p_show.add_argument("id")
    p_show.set_defaults(handler=_cmd_show)

    p_submit = sub.add_parser("submit", help="Create a submission from a JSON file")
    p_submit.add_argument("file")
    p_submit.add_argument("--by", required=True, help="Submitter id")
    p_submit.add_argument("--username", required=True, help="Submitter username")
    p_submit.set_defaults(handler=_cmd_submit)

    p_decide = sub.add_parser("decide", help="Approve or reject a submission")
    p_decide.add_argument("id")
    p_decide.add_argument("action", help="approve | reject")
    p_decide.add_argument("--remark", default=None)
    p_decide.add_argument("--by", required=True, help="Reviewer id")
    p_decide.add_argument("--name", default=None, help="Reviewer display name")
    p_decide.set_defaults(handler=_cmd_decide)

    p_stats = sub.add_parser("stats", help="Count submissions per status")
    p_stats.set_defaults(handler=_cmd_stats)

    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, open the store and dispatch the command."""
    settings = get_settings()
    setup_logging(settings.log_level)

    args = build_parser().parse_args(argv)
    store = SubmissionService(storage_path=args.storage)
    logger.debug(f"{settings.app_name}: {args.command} on {store.repository.path}")
    return args.handler(store, args)


if __name__ == "__main__":
    sys.exit(run())
