#!/usr/bin/env python3
"""
CLI for the BeFrames job compiler.

Commands:
    compile  - Compile a job settings file and print the task list
    submit   - Compile a job settings file and submit it to the scheduler
    service  - Run the HTTP compile service

Runnable in dev via:

  python -m src.beframes <command> [args...]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import get_config
from .models import JobType
from .submitter import CompileResult, compile_document, submit_document


def _setup_logging(log_name: str, verbose: bool = False) -> None:
    log_root = Path(get_config().log_root)
    log_root.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_root / log_name, encoding="utf-8"),
        ],
        force=True,
    )


def _read_document(path_arg: str) -> Tuple[Optional[Dict[str, Any]], Optional[CompileResult]]:
    settings_path = Path(path_arg)

    if not settings_path.exists():
        return None, CompileResult(
            ok=False,
            error=f"Settings file not found: {settings_path}",
            hint="Ensure the job settings JSON file exists at the specified path.",
        )

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        return None, CompileResult(
            ok=False,
            error=f"Invalid JSON in settings file: {e}",
            hint="Check the settings file for syntax errors.",
        )

    if not isinstance(document, dict):
        return None, CompileResult(
            ok=False,
            error="Settings file must contain a JSON object",
            hint="Wrap the job settings in {...}.",
        )
    return document, None


def _emit(result: CompileResult) -> int:
    # Always output JSON as the last line
    print(json.dumps(result.to_dict()))
    return 0 if result.ok else 1


def _cmd_compile(args: argparse.Namespace) -> int:
    _setup_logging("compile.log", args.verbose)
    document, error = _read_document(args.settings)
    if error is not None:
        return _emit(error)

    try:
        created = datetime.fromisoformat(args.created) if args.created else None
    except ValueError as e:
        return _emit(CompileResult(
            ok=False,
            error=f"Invalid --created value: {e}",
            hint="Use ISO 8601, e.g. 2025-12-18T10:12:33.",
        ))

    result = compile_document(
        document,
        get_config(),
        job_type=args.job_type,
        job_name=args.job_name,
        created=created,
    )
    return _emit(result)


def _cmd_submit(args: argparse.Namespace) -> int:
    _setup_logging("submit.log", args.verbose)
    document, error = _read_document(args.settings)
    if error is not None:
        return _emit(error)

    config = get_config()
    if args.scheduler_url:
        config.scheduler_url = args.scheduler_url

    result = submit_document(document, config, job_type=args.job_type, job_name=args.job_name)
    return _emit(result)


def _cmd_service(args: argparse.Namespace) -> int:
    from ..beframes_service import run_service

    _setup_logging("service.log", args.verbose)
    config = get_config()
    run_service(host=args.host or config.host, port=args.port or config.port)
    return 0


def _add_job_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--settings", required=True, help="Path to the job settings JSON file")
    parser.add_argument(
        "--job-type",
        choices=[t.value for t in JobType],
        default=None,
        help="Job type (defaults to the file's job_type, then blender-path)",
    )
    parser.add_argument("--job-name", default=None, help="Override the job name")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="beframes",
        description="Compile Blender render jobs into farm tasks",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    compile_parser = subparsers.add_parser("compile", help="Compile a job and print its tasks as JSON")
    _add_job_arguments(compile_parser)
    compile_parser.add_argument(
        "--created",
        default=None,
        help="Job creation time (ISO 8601); defaults to now",
    )
    compile_parser.set_defaults(func=_cmd_compile)

    submit_parser = subparsers.add_parser("submit", help="Compile a job and submit it to the scheduler")
    _add_job_arguments(submit_parser)
    submit_parser.add_argument("--scheduler-url", default=None, help="Scheduler base URL")
    submit_parser.set_defaults(func=_cmd_submit)

    service_parser = subparsers.add_parser("service", help="Run the HTTP compile service")
    service_parser.add_argument("--host", default=None)
    service_parser.add_argument("--port", type=int, default=None)
    service_parser.set_defaults(func=_cmd_service)

    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
