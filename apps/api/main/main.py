"""
CLI entrypoint for running OTP Manager FastAPI service.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn
from dotenv import load_dotenv

log = logging.getLogger(__name__)


def _configure_logging(*, level: str) -> None:
    """
    Configure process-wide logging defaults for API process.

    Args:
        level: Root log level name.
    Returns:
        None.
    Assumptions:
        Logging is configured once at process start.
    Raises:
        None.
    Side Effects:
        Sets root logging handlers and format.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _load_env_file(*, path: str) -> bool:
    """
    Load optional dotenv file into process environment before app wiring.

    Args:
        path: Dotenv file path; empty string disables loading.
    Returns:
        bool: `True` when at least one variable was read from the file.
    Assumptions:
        Variables already set in the process environment win over file values.
    Raises:
        None.
    Side Effects:
        Mutates `os.environ`.
    """
    if not path:
        return False
    loaded = load_dotenv(dotenv_path=path, override=False)
    if loaded:
        log.info("api env file loaded path=%s", path)
    return loaded


def _build_parser() -> argparse.ArgumentParser:
    """
    Build command-line parser for API process.

    Args:
        None.
    Returns:
        argparse.ArgumentParser: Configured parser.
    Assumptions:
        Defaults are suitable for local development.
    Raises:
        None.
    Side Effects:
        None.
    """
    parser = argparse.ArgumentParser(prog="otp-manager-api")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=8080, help="Bind port")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("debug", "info", "warning", "error"),
        help="Root log level",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Dotenv file read before wiring; missing file is ignored, empty value disables",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run API process using uvicorn.

    Args:
        argv: Optional command arguments without program name.
    Returns:
        int: Process exit code.
    Assumptions:
        Import path `apps.api.main.app:app` is available in PYTHONPATH.
    Raises:
        None.
    Side Effects:
        Starts HTTP server loop.
    """
    args = _build_parser().parse_args(argv)
    _configure_logging(level=args.log_level)
    _load_env_file(path=args.env_file)
    uvicorn.run(
        "apps.api.main.app:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
