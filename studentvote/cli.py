"""Command-line name lookup against the roster.

Usage:
    studentvote-resolve "Bilal Mouttali"
    studentvote-resolve "Mouttali" --roster data/etudiant.json --check-eligibility

Prints a JSON document and exits 0 when the name resolves (and, with
--check-eligibility, the student may sign up), 1 otherwise, 2 on a roster or
configuration error."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

from .eligibility import EligibilityGate, SignupValidator
from .errors import BackendError, RosterError
from .logging_config import configure_logging, resolve_level
from .resolution import MatchResult, NameMatcher
from .roster import load_roster
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def _match_to_dict(result: MatchResult) -> dict[str, Any]:
    return {
        "status": result.status.value,
        "method": result.method,
        "reason": result.reason,
        "match": result.entry.to_record() if result.entry else None,
        "candidates": result.sample_names,
        "candidate_count": len(result.candidates),
    }


async def _check_signup(name: str, matcher: NameMatcher, settings: Settings) -> dict[str, Any]:
    from .backend import create_repository

    repository = await create_repository(settings)
    gate = EligibilityGate(repository.check_student_eligibility, timeout=settings.eligibility_timeout_seconds)
    check = await SignupValidator(matcher, gate).validate_and_resolve(name)
    return check.to_dict()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve a student name against the roster")
    parser.add_argument("name", help="Name as a student would type it")
    parser.add_argument("--roster", type=str, help="Roster JSON file (default: ROSTER_PATH setting)")
    parser.add_argument(
        "--check-eligibility",
        action="store_true",
        help="Also ask Supabase whether the matched student may sign up",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    settings = get_settings()

    configure_logging(source="cli", level=resolve_level(settings.log_level, args.debug))

    try:
        roster = load_roster(args.roster or settings.roster_path)
    except RosterError as e:
        logger.error(str(e))
        return 2

    matcher = NameMatcher(roster)

    if args.check_eligibility:
        try:
            output = asyncio.run(_check_signup(args.name, matcher, settings))
        except BackendError as e:
            logger.error(str(e))
            return 2
        ok = output["valid"] and output["available"]
    else:
        result = matcher.resolve(args.name)
        output = _match_to_dict(result)
        ok = result.is_resolved

    print(json.dumps(output, ensure_ascii=False, indent=2))
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
