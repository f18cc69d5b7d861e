#!/usr/bin/env python3
"""
dockview - Docker Client Module
-----------
Thin read-only wrapper over the docker SDK low-level API. Every request is
bounded by the client timeout, and SDK or transport failures are re-raised
as DockerClientError.
"""
import functools
import logging

import docker
import requests

logger = logging.getLogger(__name__)


class DockerClientError(Exception):
    """A request to the Docker daemon failed"""


def _wrap_errors(func):
    """Translate docker and requests exceptions into DockerClientError"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (docker.errors.DockerException, requests.exceptions.RequestException) as e:
            logger.warning("%s failed: %s", func.__name__, e)
            raise DockerClientError(str(e)) from e
    return wrapper


class ContainerClient:
    def __init__(self, api):
        # api is a docker.APIClient, or anything with the same three methods
        self.api = api

    @classmethod
    def from_env(cls, timeout=10):
        """Connect using DOCKER_HOST / TLS settings from the environment"""
        try:
            client = docker.from_env(timeout=timeout, version="auto")
        except (docker.errors.DockerException, requests.exceptions.RequestException) as e:
            raise DockerClientError(str(e)) from e
        logger.info("Connected to Docker API %s at %s", client.api.api_version, client.api.base_url)
        return cls(client.api)

    @_wrap_errors
    def list_containers(self):
        """Raw records for all containers, stopped ones included"""
        return self.api.containers(all=True)

    @_wrap_errors
    def inspect_container(self, container_id):
        """Raw inspection result for one container"""
        return self.api.inspect_container(container_id)

    @_wrap_errors
    def fetch_logs(self, container_id, tail=5):
        """Last `tail` lines of combined stdout/stderr, with timestamps"""
        raw = self.api.logs(
            container_id,
            stdout=True,
            stderr=True,
            timestamps=True,
            tail=tail,
        )
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        return raw.replace("\r", "").strip()
