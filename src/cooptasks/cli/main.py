# src/cooptasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds RuntimeState, then runs the task group:
- console reader in a background thread feeding line events (optional),
- SIGINT/SIGTERM turned into the termination event,
- the task group loop in the main thread until /exit, EOF or termination.
"""

from __future__ import annotations

import logging
import signal
import sys

from ..cli.bootstrap import create_runtime
from ..config import get_settings
from ..connectors.console_connector import ConsoleReader, console_task
from ..core.errors import Terminated
from ..core.state import RuntimeState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_TERMINATED = 130


def _install_signal_handlers(state: RuntimeState) -> None:
    tag = state.settings.terminate_tag

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, posting %r.", signum, tag)
        state.events.post(tag)

    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is None:
            continue
        try:
            signal.signal(sig, _handle_signal)
        except (OSError, ValueError):
            # Not the main thread, or the platform does not know this signal.
            logger.debug("Cannot install handler for %s", sig, exc_info=True)


def run(state: RuntimeState) -> int:
    """Run the group until it finishes. Returns a process exit code."""
    settings = state.settings

    reader: ConsoleReader | None = None
    if settings.console_enabled:
        reader = ConsoleReader(state.events.post, tag=settings.console_tag)
        state.group.add(console_task, state, name="console")
        reader.start()
    else:
        logger.info("Console disabled; running registered tasks only.")

    try:
        state.group.run()
    except Terminated:
        logger.info("Terminated.")
        print()
        return EXIT_TERMINATED
    finally:
        if reader is not None:
            reader.stop()
        state.events.close()
        logger.info("Bye.")
    return 0


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.data_dir, log_file_name=settings.log_file_name, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_runtime(settings=settings)
    if settings.signals_enabled:
        _install_signal_handlers(state)

    sys.exit(run(state))


if __name__ == "__main__":
    main()
