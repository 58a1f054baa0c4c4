"""
Check coordinator for updatecheck.

Decides whether a check is due, runs it on a background thread, and holds
the resulting messages until the host asks for them.

Typical use in a CLI:

    updates = Coordinator()
    updates.check("granted", __version__, prod=True)
    ...  # the host's real work
    updates.print()
"""

import logging
import sys
import threading
from concurrent.futures import Future, wait
from typing import Callable

import httpx

from updatecheck import client as check_client
from updatecheck import ledger
from updatecheck.config import is_disabled, load_config
from updatecheck.errors import UpdateCheckError

logger = logging.getLogger(__name__)


def _print_to_stderr(message: str) -> None:
    # stderr so piped stdout stays clean
    print(message, file=sys.stderr, flush=True)


def _resolved(result: check_client.CheckResponse | None = None) -> Future:
    future: Future = Future()
    future.set_result(result)
    return future


class Coordinator:
    """Owns pending update messages for the lifetime of one process."""

    def __init__(self, emit: Callable[[str], None] | None = None):
        self.emit = emit or _print_to_stderr
        self._lock = threading.Lock()
        self._messages: list[str] = []
        self._futures: list[Future] = []

    def check(
        self,
        application: str,
        current_version: str,
        prod: bool,
        *,
        client: httpx.Client | None = None,
        url: str | None = None,
    ) -> Future:
        """
        Start a background update check if one is due today.

        Returns a future resolving to the CheckResponse, or to None when
        the check was skipped or failed. It never resolves to an exception.
        """
        if is_disabled():
            logger.debug("update check disabled by environment, skipping update check")
            return _resolved()

        record = ledger.load(application)
        today = ledger.current_weekday()
        if record.last_check_for_updates == today:
            logger.debug("skipping update check until tomorrow")
            return _resolved()

        # Captured here: the worker thread's stack has no host frames
        caller = check_client.caller_package()

        future: Future = Future()
        # RUNNING futures cannot be cancelled by the host
        future.set_running_or_notify_cancel()
        with self._lock:
            self._messages = []
            self._futures.append(future)

        worker = threading.Thread(
            target=self._run,
            args=(future, application, current_version, prod, client, url, caller),
            name=f"updatecheck-{application}",
            daemon=True,
        )
        worker.start()
        return future

    def _run(
        self,
        future: Future,
        application: str,
        current_version: str,
        prod: bool,
        client: httpx.Client | None,
        url: str | None,
        caller: str,
    ) -> None:
        result = None
        try:
            result = self._do_check(application, current_version, prod, client, url, caller)
        except Exception as e:
            logger.debug(f"error when checking for updates: {e}")
        future.set_result(result)

    def _do_check(
        self,
        application: str,
        current_version: str,
        prod: bool,
        client: httpx.Client | None,
        url: str | None,
        caller: str,
    ) -> check_client.CheckResponse:
        config = load_config()
        settings = config["updatecheck"]

        request = check_client.build_request(application, current_version)
        response = check_client.check_for_update(
            request,
            url or check_client.endpoint_url(prod, config),
            client=client,
            caller=caller,
            timeout=float(settings.get("timeout", 5.0)),
        )

        try:
            ledger.save(
                application,
                ledger.LedgerRecord(last_check_for_updates=ledger.current_weekday()),
            )
        except UpdateCheckError as e:
            logger.debug(f"error saving version config: {e}")

        with self._lock:
            self._messages.append(response.message)
        return response

    def messages(self) -> list[str]:
        """Snapshot of pending messages, without draining them."""
        with self._lock:
            return list(self._messages)

    def print(self) -> None:
        """Wait for in-flight checks, then emit each non-empty message once."""
        with self._lock:
            futures = list(self._futures)
        wait(futures)

        with self._lock:
            messages, self._messages = self._messages, []
            self._futures = [f for f in self._futures if not f.done()]

        for message in messages:
            if message:
                self.emit(message)
