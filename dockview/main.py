#!/usr/bin/env python3
"""
dockview - Main Entry Point
-----------
Launches the container dashboard.

Lists every container on the Docker daemon with its details and last log
lines. Read-only: nothing is started, stopped or removed.

Controls:
  - ↑/↓          : Navigate containers
  - ←/→          : Scroll the table columns sideways
  - Enter/Click  : Show details and logs for the selected container
  - Mouse wheel  : Scroll the Details or Logs pane
  - R            : Refresh
  - Q/Esc        : Quit

Environment:
  DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH  daemon connection
  DOCKVIEW_TIMEOUT    per-request timeout in seconds (default 10)
  DOCKVIEW_LOG_TAIL   log lines shown per container (default 5)
  DOCKVIEW_LOG_FILE   write diagnostics to this file
  DOCKVIEW_LOG_LEVEL  diagnostics level (default WARNING)
"""
import curses
import locale
import logging
import os
import sys

from dockview.core.client import ContainerClient, DockerClientError
from dockview.core.docker_tui import DockerTUI
from dockview.utils.config import load_config
from dockview.utils.logger import configure_logging, resolve_log_level

logger = logging.getLogger(__name__)


def setup_logging(config):
    """Configure logging; a bad level or unusable log file falls back to defaults"""
    level = config["log_level"]
    try:
        resolve_log_level(level)
        bad_level = None
    except ValueError:
        bad_level, level = level, "WARNING"

    try:
        configure_logging(config["log_file"], level)
    except OSError as e:
        print(f"Cannot write log file {config['log_file']}: {e}; logging disabled", file=sys.stderr)
        configure_logging(None, level)

    if bad_level is not None:
        logger.warning("Unknown log level %r, using WARNING", bad_level)


def main():
    config = load_config()
    setup_logging(config)

    try:
        client = ContainerClient.from_env(timeout=config["timeout"])
    except DockerClientError as e:
        logger.error("Cannot connect to Docker: %s", e)
        print("Error connecting to Docker daemon:", e, file=sys.stderr)
        print("Make sure Docker is running and you have access to /var/run/docker.sock", file=sys.stderr)
        return 1

    # Escape should quit without the default one second delay
    os.environ.setdefault("ESCDELAY", "25")
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error as e:
        logger.warning("Cannot apply the environment locale: %s", e)

    try:
        curses.wrapper(DockerTUI(client, config).run)
    except KeyboardInterrupt:
        # Ctrl+C quits like Q
        pass
    return 0


if __name__ == '__main__':
    sys.exit(main())
