"""Synchronous request/reply transport contract."""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class SyncClient(ABC):
    """Blocking request/reply channel to the certificate generator.

    Implementations send one frame and block until the matching reply frame
    arrives, raising TransportError when that is not possible.
    """

    @abstractmethod
    def send_and_receive(self, frame: Sequence[str]) -> list[str]:
        """Send a frame and return the full reply frame."""
        ...
