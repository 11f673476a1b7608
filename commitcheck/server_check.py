"""
Side-channel check that the submission's HTTP server works.

Starts the server from the checkout and polls its time endpoint until it
answers correctly or the retries are exhausted.
"""

import os
import signal
import subprocess
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

import requests
from dateutil import parser as dateutil_parser

from .config import (
    SERVER_COMMAND,
    SERVER_MAX_RETRIES,
    SERVER_PATH,
    SERVER_PORT,
    SERVER_RETRY_DELAY_SECONDS,
    SERVER_TIME_TOLERANCE_HOURS,
)


def probe_time_endpoint(url: str, timeout: float) -> str | None:
    """
    Perform one GET request against the time endpoint.

    The endpoint must answer 2xx with a JSON body like
    `{"Time": "2025-02-20T10:00:00Z"}` whose time is within an hour of now.

    Args:
        url: Endpoint URL.
        timeout: Request timeout in seconds.

    Returns:
        None if the answer is correct, otherwise a problem description.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        return str(e)

    if response.status_code < 200 or response.status_code >= 300:
        return f"unexpected status code {response.status_code}"

    try:
        data = response.json()
        reported = dateutil_parser.isoparse(data["Time"])
    except (ValueError, KeyError, TypeError) as e:
        return f"bad response body: {e}"

    if reported.tzinfo is None:
        reported = reported.replace(tzinfo=timezone.utc)
    now = datetime.now(timezone.utc)
    tolerance = timedelta(hours=SERVER_TIME_TOLERANCE_HOURS)
    if reported < now - tolerance or reported > now + tolerance:
        return f"wrong time: {data['Time']}"
    return None


def check_server(
    checkout_dir: Path,
    command: list[str] | None = None,
    port: int = SERVER_PORT,
    path: str = SERVER_PATH,
    retry_delay: float = SERVER_RETRY_DELAY_SECONDS,
    max_retries: int = SERVER_MAX_RETRIES,
) -> str | None:
    """
    Start the server in `checkout_dir` and verify its time endpoint.

    The first probe is made right after start-up, then up to `max_retries`
    more, `retry_delay` seconds apart. The server and everything it started are always killed.

    Args:
        checkout_dir: Repository working tree.
        command: Command starting the server. Defaults to SERVER_COMMAND.
        port: Local port the server listens on.
        path: Path of the time endpoint.
        retry_delay: Seconds between probes.
        max_retries: Failed probes tolerated after the first one.

    Returns:
        None if the server answered correctly, otherwise the last problem.
    """
    cmd = command or SERVER_COMMAND
    try:
        process = subprocess.Popen(
            cmd,
            cwd=str(checkout_dir),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        return f"cannot start server: {e}"

    url = f"http://localhost:{port}{path}"
    try:
        print("  Trying HTTP GET...")
        error = probe_time_endpoint(url, timeout=retry_delay * 2)
        retries = 0
        while error is not None and retries < max_retries:
            time.sleep(retry_delay)
            print("  Trying HTTP GET...")
            error = probe_time_endpoint(url, timeout=retry_delay * 2)
            retries += 1
        return error
    finally:
        # `go run` starts the real server as a child; kill the whole group
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        process.wait()
