"""Application entry point for schemadeck."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from rich.console import Console
from rich.prompt import Confirm

import settings
from adapters.console_notifier import ConsoleNotifier
from client import build_cluster_ref, build_service
from core.config import WorkflowConfig
from core.errors import WorkflowError
from core.models import CURRENT_DRAFT, PREDEFINED_TEST_CONFIG
from core.workflow import ApplyWorkflowController

NAME = "SCHEMADECK"
FONT = "tarty-1"

# Exit codes for the command line.
EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REJECTED = 2


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    redact_cfg = config.get("redact", {}) if config else {}
    if not redact_cfg.get("enabled", False):
        return []
    values = []
    for name in redact_cfg.get("patterns", []):
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/schemadeck.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_controller() -> ApplyWorkflowController:
    cluster = build_cluster_ref(settings.CLUSTER_ALIAS, settings.CLUSTER_ENDPOINT)
    service = build_service(settings.REQUEST_TIMEOUT_SECONDS)
    config = WorkflowConfig(
        test_config=settings.TEST_CONFIG,
        history_size=settings.NOTIFICATION_HISTORY_SIZE,
    )
    logging.getLogger(__name__).info("Target cluster %s at %s", cluster.alias, cluster.endpoint)
    return ApplyWorkflowController(service, cluster, config=config)


def _panel() -> int:
    _print_banner()
    from frontend.app import SchemaPanelApp

    SchemaPanelApp(_build_controller()).run()
    return EXIT_OK


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


async def _fetch(controller: ApplyWorkflowController) -> int:
    if not await controller.reload():
        return EXIT_FAILED
    sys.stdout.write(controller.draft.content)
    return EXIT_OK


async def _validate(controller: ApplyWorkflowController, path: str) -> int:
    controller.draft.edit(_read_text(path))
    request = await controller.validate()
    return EXIT_OK if request.succeeded else EXIT_FAILED


async def _apply(controller: ApplyWorkflowController, path: Optional[str], test_config: bool, yes: bool) -> int:
    if not test_config:
        controller.draft.edit(_read_text(path))
        request = await controller.apply(CURRENT_DRAFT)
        return EXIT_OK if request.succeeded else EXIT_FAILED

    await controller.apply(PREDEFINED_TEST_CONFIG)
    if not yes and not Confirm.ask(controller.prompt.text, default=False):
        controller.cancel()
        return EXIT_REJECTED
    request = await controller.confirm()
    return EXIT_OK if request is not None and request.succeeded else EXIT_FAILED


async def _upload(controller: ApplyWorkflowController, path: str) -> int:
    with open(path, "rb") as handle:
        data = handle.read()
    request = await controller.upload_archive(data, os.path.basename(path))
    return EXIT_OK if request.succeeded else EXIT_FAILED


def _run_command(args: argparse.Namespace) -> int:
    console = Console(stderr=True)
    controller = _build_controller()
    controller.on_notify(ConsoleNotifier(console))

    if args.command == "fetch":
        command = _fetch(controller)
    elif args.command == "validate":
        command = _validate(controller, args.file)
    elif args.command == "apply":
        command = _apply(controller, args.file, args.test_config, args.yes)
    else:
        command = _upload(controller, args.archive)

    try:
        return asyncio.run(command)
    except WorkflowError as exc:
        console.print(f"[bold yellow]Rejected:[/] {exc}")
        return EXIT_REJECTED


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="schemadeck")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("panel", help="Launch the schema panel TUI")
    subparsers.add_parser("fetch", help="Print the schema currently applied on the cluster")

    validate_parser = subparsers.add_parser("validate", help="Check a schema file against the cluster")
    validate_parser.add_argument("file")

    apply_parser = subparsers.add_parser("apply", help="Apply a schema file or the predefined test config")
    apply_source = apply_parser.add_mutually_exclusive_group(required=True)
    apply_source.add_argument("file", nargs="?")
    apply_source.add_argument("--test-config", action="store_true", help="Apply the predefined test config")
    apply_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    upload_parser = subparsers.add_parser("upload", help="Upload a ZIP archive with config.yml")
    upload_parser.add_argument("archive")

    args = parser.parse_args(argv)
    _configure_logging()
    if args.command in {None, "panel"}:
        return _panel()
    return _run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
