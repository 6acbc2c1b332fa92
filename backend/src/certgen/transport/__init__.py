"""Transports carrying command frames to the certificate generator."""

from certgen.transport.base import SyncClient
from certgen.transport.local import LocalSyncClient, SerializedSyncClient

__all__ = ["LocalSyncClient", "SerializedSyncClient", "SyncClient"]
