# src/pkg_jwt_auth/cli.py

from __future__ import annotations

import argparse
import json
import sys
import time
from typing import Any, Sequence

from .adapters.jwt.codec import JWTTokenCodec
from .config.env import settings_from_env
from .domain.exceptions import AuthenticationError, ConfigurationError
from .domain.value_objects import Claims, split_reserved
from .log import configure_logging, get_logger

logger = get_logger(__name__)


def _parse_claim(raw: str) -> tuple[str, Any]:
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {raw!r}")
    try:
        return key, json.loads(value)
    except ValueError:
        return key, value


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-jwt-auth",
        description="Inspect or mint tokens using JWT_* environment settings",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level for diagnostics written to stderr (default: warning).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", help="Verify a token and print its claims.")
    inspect.add_argument("token", help="Raw token string (without 'Bearer ').")

    mint = sub.add_parser(
        "mint",
        help="Sign a token for USER without a credential check (service tokens, debugging).",
    )
    mint.add_argument("user", help="Value of the 'id' claim.")
    mint.add_argument(
        "--claim",
        "-c",
        action="append",
        type=_parse_claim,
        default=[],
        metavar="KEY=VALUE",
        help="Extra claim; VALUE is parsed as JSON when possible. Repeatable.",
    )

    return parser.parse_args(args=argv)


def _run(args: argparse.Namespace) -> dict[str, Any]:
    settings = settings_from_env()
    codec = JWTTokenCodec(settings.key_bytes, settings.signing_algorithm)

    if args.command == "inspect":
        payload = codec.decode(args.token)
        claims = Claims.from_payload(payload)
        return {"id": claims.subject, "claims": dict(payload)}

    extra, dropped = split_reserved(dict(args.claim))
    if dropped:
        logger.warning("ignoring reserved claim names", keys=list(dropped))

    claims = Claims.issue(
        args.user,
        now=time.time(),
        timeout_seconds=settings.timeout.total_seconds(),
        refreshable=settings.refresh_enabled,
        extra=extra,
    )
    return {"token": codec.encode(claims), "claims": claims.to_payload()}


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    try:
        summary = _run(args)
    except (AuthenticationError, ConfigurationError) as exc:
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise SystemExit(1) from exc

    json.dump({"ok": True, **summary}, sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
