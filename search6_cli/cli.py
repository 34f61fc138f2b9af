import asyncio
import re
import sys
from typing import Optional, TextIO

from search6_cli.logger import logger
from search6_cli.search6 import lookup_user, build_card_url
from search6_cli.search6.exceptions import ArgumentError, Search6Error
from search6_cli.search6.structures import UserRecord, INT64_MIN, INT64_MAX

LEVEL_THRESHOLD = 5

_IDENTIFIER_RE = re.compile(r"[+-]?[0-9]+")


def parse_identifier(argv: list[str]) -> int:
    """Parse ``argv[1]`` as a signed base-10 64-bit integer."""
    try:
        raw = argv[1]
    except IndexError:
        raise ArgumentError("missing identifier: usage: search6 <id>") from None

    if not _IDENTIFIER_RE.fullmatch(raw):
        raise ArgumentError(f"parsing {raw!r}: invalid syntax")
    # int() refuses very long digit strings, anything past 19 digits is out of range anyway
    if len(raw.lstrip("+-").lstrip("0")) > 19:
        raise ArgumentError(f"parsing {raw!r}: value out of range")
    value = int(raw)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ArgumentError(f"parsing {raw!r}: value out of range")
    return value


def format_summary(user: UserRecord) -> str:
    return f"{user['username']}#{user['discriminator']} ({user['id']}) is level {user['level']}"


def format_card(user: UserRecord) -> str:
    return f"{build_card_url(user['id'])} <@{user['id']}>"


def present(user: UserRecord, out: Optional[TextIO] = None):
    if out is None:
        out = sys.stdout
    print(format_summary(user), file=out)
    if user["level"] >= LEVEL_THRESHOLD:
        print(format_card(user), end="", file=out)


def main(argv: Optional[list[str]] = None) -> int:
    """Run one lookup, print the result and return the process exit code."""
    if argv is None:
        argv = sys.argv

    try:
        identifier = parse_identifier(argv)
        user = asyncio.run(lookup_user(identifier))
    except Search6Error as e:
        logger.info("Lookup failed with exit code %d: %s", e.exit_code, e)
        print(e)
        return e.exit_code

    present(user)
    return 0
