"""passaudit command-line interface.

Usage examples:
    python -m passaudit check mypassword
    python -m passaudit check -f passwords.txt --strength
    python -m passaudit score "correct horse battery staple"
"""

import argparse
import dataclasses
import logging
import sys

from passaudit.auditor import PasswordAuditor
from passaudit.config import LOG_LEVELS, ConfigError, load_settings
from passaudit.errors import BreachServiceError
from passaudit.strength import StrengthResult

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_BAR_WIDTH = 20


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="passaudit",
        description="Score password strength and check passwords against known data breaches.",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging level (default: PASSAUDIT_LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--no-breach",
        action="store_true",
        help="Disable breach lookups regardless of configuration",
    )
    sub = parser.add_subparsers(dest="command")

    # ── check ──────────────────────────────────────────────────────────
    check_p = sub.add_parser(
        "check", help="Check passwords against the breach database",
    )
    _add_password_args(check_p)
    check_p.add_argument(
        "-s", "--strength",
        action="store_true",
        help="Include strength analysis in output",
    )

    # ── score ──────────────────────────────────────────────────────────
    score_p = sub.add_parser("score", help="Score password strength (offline)")
    _add_password_args(score_p)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    if args.no_breach:
        settings = dataclasses.replace(
            settings, breach=dataclasses.replace(settings.breach, enabled=False),
        )
    logging.basicConfig(level=args.log_level or settings.log_level, format=LOG_FORMAT)

    try:
        passwords = _collect_passwords(args)
    except OSError as exc:
        print(f"Error: cannot read {args.file}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    if not passwords:
        print("Error: provide passwords as arguments or via --file", file=sys.stderr)
        return 1

    with PasswordAuditor(settings) as auditor:
        if args.command == "check":
            return _cmd_check(auditor, passwords, args.strength)
        return _cmd_score(auditor, passwords)


def _add_password_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("passwords", nargs="*", help="Passwords to check")
    p.add_argument(
        "-f", "--file",
        help="Read passwords from a file (one per line)",
    )


def _collect_passwords(args: argparse.Namespace) -> list[str]:
    passwords = list(args.passwords)
    if args.file:
        # undecodable bytes survive as lone surrogates instead of aborting the run
        with open(args.file, encoding="utf-8", errors="surrogateescape") as f:
            passwords.extend(line.rstrip("\r\n") for line in f if line.strip())
    return passwords


def _shown(pwd: str) -> str:
    return pwd.encode("utf-8", "backslashreplace").decode("utf-8")


def _too_long(auditor: PasswordAuditor, pwd: str) -> bool:
    limit = auditor.settings.max_length
    if len(pwd) > limit:
        print(f"  ERROR     password of length {len(pwd)} exceeds {limit} characters")
        return True
    return False


def _print_strength(report: StrengthResult, indent: str = "            ") -> None:
    filled = round(report.score / 100 * _BAR_WIDTH)
    bar = "#" * filled + "-" * (_BAR_WIDTH - filled)
    print(f"{indent}Strength: [{bar}] {report.score}/100 {report.category.value} "
          f"({report.entropy} bits)")
    for w in report.warnings:
        print(f"{indent}! {w}")
    for s in report.suggestions:
        print(f"{indent}- {s}")


def _cmd_check(auditor: PasswordAuditor, passwords: list[str], strength: bool) -> int:
    if not auditor.checker.enabled:
        print("  Note: breach checking is disabled", file=sys.stderr)

    breached = False
    for pwd in passwords:
        if _too_long(auditor, pwd):
            continue

        try:
            result = auditor.check_breach(pwd)
        except BreachServiceError as exc:
            print(f"  UNKNOWN   '{_shown(pwd)}' -- could not determine breach status ({exc.kind.value})")
        else:
            if result.found:
                print(f"  BREACHED  '{_shown(pwd)}' -- found {result.breach_count:,} times")
                breached = True
            else:
                print(f"  Safe      '{_shown(pwd)}' -- not found in any known breaches")

        if strength:
            _print_strength(auditor.evaluate(pwd))

    return 1 if breached else 0


def _cmd_score(auditor: PasswordAuditor, passwords: list[str]) -> int:
    for pwd in passwords:
        if _too_long(auditor, pwd):
            continue
        print(f"  '{_shown(pwd)}'")
        _print_strength(auditor.evaluate(pwd))
    return 0


if __name__ == "__main__":
    sys.exit(main())
