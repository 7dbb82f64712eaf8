from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pydantic import ValidationError

from rabbitmq_aliveness.checks.aliveness_check import run_aliveness
from rabbitmq_aliveness.checks.results import CheckResult, Status
from rabbitmq_aliveness.config import VERSION, settings
from rabbitmq_aliveness.errors import ConfigError
from rabbitmq_aliveness.formatting import format_result
from rabbitmq_aliveness.models import CheckConfig

logger = logging.getLogger(__name__)


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors as UNKNOWN instead of exit 2."""

    def error(self, message: str) -> NoReturn:
        raise ConfigError(message)


def build_parser() -> PluginArgumentParser:
    parser = PluginArgumentParser(
        prog="check_rabbitmq_aliveness",
        description="Check RabbitMQ vhost aliveness via the management API.",
    )
    parser.add_argument(
        "-H", "--hostname", "--host",
        dest="host",
        default=settings.RABBITMQ_HOST,
        help="RabbitMQ management host ($RABBITMQ_HOST)",
    )
    parser.add_argument(
        "--port", type=int, default=settings.RABBITMQ_PORT,
        help="Management API port (default: %(default)s)",
    )
    parser.add_argument(
        "-u", "--username", "--user",
        dest="username",
        default=settings.RABBITMQ_USER,
        help="Username (default: %(default)s)",
    )
    parser.add_argument(
        "-p", "--password", default=settings.RABBITMQ_PASSWORD,
        help="Password (default: guest)",
    )
    parser.add_argument(
        "--vhost", default=settings.RABBITMQ_VHOST,
        help="Vhost to test (default: %(default)s)",
    )
    parser.add_argument(
        "--ssl", action=argparse.BooleanOptionalAction, default=False,
        help="Use HTTPS (default: %(default)s)",
    )
    parser.add_argument(
        "--ssl_strict", action=argparse.BooleanOptionalAction, default=True,
        help="Verify the server certificate when using --ssl (default: %(default)s)",
    )
    parser.add_argument(
        "--proxy", action=argparse.BooleanOptionalAction, default=True,
        help="Honor HTTP(S)_PROXY environment variables (default: %(default)s)",
    )
    parser.add_argument("--proxyurl", default=None, help="Explicit proxy URL")
    parser.add_argument(
        "-t", "--timeout", type=int, default=settings.RABBITMQ_TIMEOUT,
        help="Request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log verbosity on stderr (-v info, -vv debug)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def parse_config(argv: list[str] | None = None) -> tuple[CheckConfig, int]:
    args = build_parser().parse_args(argv)
    if not args.host:
        raise ConfigError("--hostname is required")
    try:
        config = CheckConfig(
            host=args.host,
            port=args.port,
            vhost=args.vhost,
            username=args.username,
            password=args.password,
            use_tls=args.ssl,
            verify_tls=args.ssl_strict,
            use_env_proxy=args.proxy,
            proxy_url=args.proxyurl or None,
            timeout_s=args.timeout,
        )
    except ValidationError as exc:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"invalid configuration: {errors}") from exc
    return config, args.verbose


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    if verbosity < 2:
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv: list[str] | None = None) -> int:
    try:
        config, verbosity = parse_config(argv)
    except ConfigError as exc:
        result = CheckResult(status=exc.status, message=str(exc))
        print(format_result(result))
        return result.exit_code

    _configure_logging(verbosity)
    try:
        result = run_aliveness(config)
    except Exception as exc:
        logger.exception("Aliveness check crashed")
        result = CheckResult(
            status=Status.UNKNOWN, message=f"{exc.__class__.__name__}: {exc}"
        )

    print(format_result(result))
    return result.exit_code
