"""In-process transports.

LocalSyncClient hands frames straight to a Python callable, which makes it
suitable for embedding the certificate generator in the same process and for
tests. SerializedSyncClient wraps any transport whose underlying channel
cannot carry more than one request at a time.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

from shared.config import settings

from certgen.errors import TransportError
from certgen.transport.base import SyncClient

logger = logging.getLogger(__name__)

RequestHandler = Callable[[list[str]], Sequence[str]]

# Marks "use settings.CERTGEN_REQUEST_TIMEOUT_SECONDS"; None already means no timeout
_SETTINGS_TIMEOUT = object()


class LocalSyncClient(SyncClient):
    """Transport that dispatches frames to an in-process handler.

    With a timeout, handlers run one at a time on a single worker thread. A
    request that timed out keeps the worker busy until its handler returns,
    so later requests queue behind it instead of running alongside it.
    """

    def __init__(
        self,
        handler: RequestHandler,
        timeout: float | None | object = _SETTINGS_TIMEOUT,
    ) -> None:
        """Initialize the transport.

        Args:
            handler: Callable receiving the request frame and returning the reply frame.
            timeout: Seconds to wait for a reply, or None to wait forever.
                Defaults to settings.CERTGEN_REQUEST_TIMEOUT_SECONDS.
        """
        if timeout is _SETTINGS_TIMEOUT:
            timeout = settings.CERTGEN_REQUEST_TIMEOUT_SECONDS
        self._handler = handler
        self._timeout: float | None = timeout  # type: ignore[assignment]
        self._executor: ThreadPoolExecutor | None = None
        self._executor_lock = threading.Lock()

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def send_and_receive(self, frame: Sequence[str]) -> list[str]:
        request = list(frame)

        try:
            if self._timeout is None:
                reply = self._handler(request)
            else:
                reply = self._call_with_timeout(request)
        except TransportError:
            raise
        except Exception as e:
            logger.error(
                "local_handler_failed",
                extra={"command": request[0] if request else None, "error": str(e)},
            )
            raise TransportError(f"Request handler failed: {e}") from e

        return self._validate_reply(reply)

    def close(self) -> None:
        """Stop the worker thread once queued work is done. Does not block."""
        with self._executor_lock:
            if self._executor is not None:
                self._executor.shutdown(wait=False, cancel_futures=True)
                self._executor = None

    def _worker(self) -> ThreadPoolExecutor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="certgen-local"
                )
            return self._executor

    def _call_with_timeout(self, request: list[str]) -> Sequence[str]:
        """Run the handler on the worker thread, bounded by the timeout."""
        future = self._worker().submit(self._handler, request)
        try:
            return future.result(timeout=self._timeout)
        except FuturesTimeoutError as e:
            # Still queued behind an abandoned request: drop it so it never runs
            cancelled = future.cancel()
            logger.warning(
                "local_request_timed_out",
                extra={
                    "command": request[0] if request else None,
                    "timeout": self._timeout,
                    "started": not cancelled,
                },
            )
            raise TransportError(f"No reply within {self._timeout} seconds") from e

    @staticmethod
    def _validate_reply(reply: Sequence[str]) -> list[str]:
        if isinstance(reply, (str, bytes)) or not isinstance(reply, Sequence):
            raise TransportError(f"Malformed reply frame: {type(reply).__name__}")
        if not all(isinstance(field, str) for field in reply):
            raise TransportError("Malformed reply frame: every field must be a string")
        return list(reply)


class SerializedSyncClient(SyncClient):
    """Allows a single in-flight request at a time on the wrapped transport."""

    def __init__(self, inner: SyncClient) -> None:
        self._inner = inner
        self._lock = threading.Lock()

    def send_and_receive(self, frame: Sequence[str]) -> list[str]:
        with self._lock:
            return self._inner.send_and_receive(frame)
