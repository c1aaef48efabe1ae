"""
Process-wide hooks for errors nobody handled.

They log and keep the server running. Rejections of type
``FeatureNotEnabledError`` are expected and dropped without a log line.
"""

import asyncio
import atexit
import logging
import sys
import threading
from typing import Any

from kiosk_api.shared.errors.types import FeatureNotEnabledError

logger = logging.getLogger(__name__)

_installed = False


def handle_uncaught_exception(exc_type, exc_value, exc_traceback) -> None:
    """``sys.excepthook`` replacement."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_traceback)
        return
    logger.critical("Unhandled Exception at", exc_info=(exc_type, exc_value, exc_traceback))


def handle_thread_exception(args: threading.ExceptHookArgs) -> None:
    """``threading.excepthook`` replacement."""
    if args.exc_type is SystemExit:
        return
    thread = args.thread.name if args.thread else "unknown"
    logger.error(
        "Unhandled Exception in thread %s",
        thread,
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )


def handle_loop_exception(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
    """Event loop handler for exceptions of tasks nobody awaited."""
    exc = context.get("exception")
    if isinstance(exc, FeatureNotEnabledError):
        return
    logger.error("Unhandled Rejection at %s", context.get("message"), exc_info=exc)


def _log_exit() -> None:
    logger.info("=== Application Closed ===")


def install_process_hooks() -> None:
    """Install the sys/threading hooks once per process."""
    global _installed
    if _installed:
        return
    sys.excepthook = handle_uncaught_exception
    threading.excepthook = handle_thread_exception
    atexit.register(_log_exit)
    _installed = True


def install_loop_hook(loop: asyncio.AbstractEventLoop | None = None) -> None:
    """Install ``handle_loop_exception`` on ``loop`` (the running loop by default)."""
    loop = loop or asyncio.get_running_loop()
    loop.set_exception_handler(handle_loop_exception)
