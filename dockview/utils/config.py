#!/usr/bin/env python3
"""
dockview - Configuration Module
-----------
Settings come from DOCKVIEW_* environment variables; nothing is persisted.
Connection settings (DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH) are
left to the docker SDK.
"""
import logging
import os

logger = logging.getLogger(__name__)

ENV_PREFIX = "DOCKVIEW_"

DEFAULT_CONFIG = {
    "timeout": 10,
    "log_tail": 5,
    "log_level": "WARNING",
    "log_file": None,
}

# Keys that must hold a positive integer
POSITIVE_INT_KEYS = ("timeout", "log_tail")


def load_config(environ=None):
    """Load configuration from the environment, falling back to defaults"""
    if environ is None:
        environ = os.environ

    config = DEFAULT_CONFIG.copy()
    for key in DEFAULT_CONFIG:
        raw = environ.get(ENV_PREFIX + key.upper())
        if raw is None or raw.strip() == "":
            continue
        raw = raw.strip()

        if key in POSITIVE_INT_KEYS:
            try:
                value = int(raw)
            except ValueError:
                value = 0
            if value <= 0:
                logger.warning("Ignoring %s%s=%r, using %s",
                               ENV_PREFIX, key.upper(), raw, DEFAULT_CONFIG[key])
                continue
            config[key] = value
        else:
            config[key] = raw

    return config
