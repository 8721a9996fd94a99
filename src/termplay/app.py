"""Entry point for the termplay command."""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from termplay.cli import parse_args
from termplay.core.config import SettingsManager
from termplay.core.controller import PlaybackController
from termplay.core.env import resolve_log_dir
from termplay.core.input_poller import InputPoller
from termplay.errors import TermplayError

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def _configure_logging(level_override: Optional[str] = None, directory: Optional[str] = None) -> Optional[Path]:
    env_level = os.environ.get("LOGLEVEL")
    level_name = (env_level or level_override or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    logs_dir = resolve_log_dir(directory)
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        logging.basicConfig(level=level)
        return None

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"termplay-{timestamp}.log"
    try:
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        logging.basicConfig(level=level)
        return None
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    file_handler.setFormatter(formatter)
    # the status display clears the terminal, so only errors go to stderr
    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(max(level, logging.ERROR))
    stream_handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=[file_handler, stream_handler], force=True)
    logger.info("Writing log to %s", log_path)
    return log_path


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Play the file named on the command line and return the exit status."""
    try:
        args = parse_args(argv)
    except TermplayError as exc:
        print(f"termplay: error: {exc}", file=sys.stderr)
        return exc.exit_code

    try:
        settings = SettingsManager(args.config)
        _configure_logging(args.log_level or settings.get_log_level(), settings.get_log_directory())
        logger.debug("Settings loaded from %s", settings.config_path)
        controller = PlaybackController.from_settings(settings, InputPoller())
        controller.run(args.file)
    except TermplayError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        print(f"termplay: error: {exc}", file=sys.stderr)
        return exc.exit_code
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_INTERRUPTED
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
