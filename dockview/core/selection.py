#!/usr/bin/env python3
"""
dockview - Selection Module
-----------
Builds the Details and Logs pane text for one selected container.
"""
import logging

from dockview.core.client import DockerClientError
from dockview.utils.utils import parse_timestamp, format_since, format_started
from dockview.views.surface import escape

logger = logging.getLogger(__name__)

NO_LOGS = "(no logs)"


def format_details(summary, detail, now=None):
    """Detail block from a summary and its inspection result"""
    state = detail.get("State") or {}
    lines = [
        f"[::b]Name:[-] {summary.name}",
        f"[::b]ID:[-] {summary.id}",
        f"[::b]Image:[-] {summary.image}",
        f"[::b]State:[-] {state.get('Status', '')}",
        f"[::b]Status:[-] {summary.status}",
    ]
    started = parse_timestamp(state.get("StartedAt"))
    if started is not None:
        lines.append(f"[::b]Started:[-] {format_started(started)} ({format_since(started, now)} ago)")
    return "\n".join(lines) + "\n"


def format_logs(text):
    text = text.replace("\r", "").strip()
    if not text:
        return NO_LOGS
    return escape(text)


class SelectionController:
    def __init__(self, client, tail=5):
        self.client = client
        self.tail = tail

    def show(self, summary):
        """
        Fetch detail and logs for a container.

        Returns (detail_text, log_text). The two requests are independent:
        a failure in one is reported inline and the other still runs.
        """
        try:
            detail = self.client.inspect_container(summary.id)
            detail_text = format_details(summary, detail)
        except DockerClientError as e:
            logger.warning("Inspect of %s failed: %s", summary.name, e)
            detail_text = f"[red]Inspect error: {escape(str(e))}"

        try:
            log_text = format_logs(self.client.fetch_logs(summary.id, self.tail))
        except DockerClientError as e:
            logger.warning("Logs of %s failed: %s", summary.name, e)
            log_text = f"[red]Logs error: {escape(str(e))}"

        return detail_text, log_text
