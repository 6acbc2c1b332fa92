"""Accessor for the remote certificate generator.

Each operation is a single blocking round trip through the injected
transport. No retries are made here: whether the remote commands are safe to
repeat is not known, so callers that retry must accept duplicate side effects.
"""

import logging
import time

from opentelemetry import trace
from shared.config import settings

from certgen.commands import Command, build_frame, error_message, is_error_reply
from certgen.csr import CertificateSigningRequest
from certgen.errors import RemoteOperationError, TransportError
from certgen.metrics import certgen_metrics
from certgen.transport.base import SyncClient

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class CertGenAccessor:
    """Issues certificate lifecycle commands to the certificate generator.

    The accessor only holds a reference to its transport; it does not open,
    close or otherwise manage it. Several accessors may share one transport.
    """

    def __init__(self, request_client: SyncClient) -> None:
        """Initialize accessor with a transport.

        Args:
            request_client: Synchronous request/reply client to the remote service.
        """
        self._request_client = request_client

    def generate_self_signed_certificate(self, service_name: str) -> None:
        """Ask the remote service to generate a self-signed certificate.

        Args:
            service_name: Name of the service configuration to generate for.

        Raises:
            RemoteOperationError: If the remote service rejects the request.
            TransportError: If the request could not be delivered.
        """
        _require_text("service_name", service_name)
        self.send_command(Command.GENERATE_SELFSIGNED_CERTIFICATE, service_name)

    def generate_csr(self, service_name: str) -> CertificateSigningRequest:
        """Ask the remote service for a CSR over a freshly generated keypair.

        The private key stays on the remote side; every call provisions a new
        keypair, so successive CSRs never share a public key.

        Args:
            service_name: Name of the service the keypair belongs to.

        Returns:
            The CSR carried in the first reply field.

        Raises:
            RemoteOperationError: If the remote service rejects the request.
            TransportError: If the request could not be delivered.
        """
        _require_text("service_name", service_name)
        payload = self.send_command(Command.GENERATE_CSR, service_name)
        return CertificateSigningRequest(payload[0])

    def import_certificate(self, service_name: str, certificate_pem: str) -> None:
        """Install a signed certificate as the service's active credential.

        The remote pairs the certificate with the keypair generated by the
        last CSR request for the same service.

        Args:
            service_name: Name of the service the certificate belongs to.
            certificate_pem: PEM-encoded certificate.

        Raises:
            RemoteOperationError: If the remote service rejects the certificate.
            TransportError: If the request could not be delivered.
        """
        _require_text("service_name", service_name)
        _require_text("certificate_pem", certificate_pem)
        self.send_command(Command.IMPORT_CERTIFICATE, service_name, certificate_pem)

    def send_command(self, command: Command, *args: str) -> list[str]:
        """Send one command frame and interpret the reply.

        Returns:
            The reply frame when it does not carry the error sentinel.

        Raises:
            RemoteOperationError: If the reply carries the error sentinel.
            TransportError: If the reply frame is empty.
            Exception: Whatever the transport raises, unchanged.
        """
        frame = build_frame(command, *args)
        command_name = frame[0]

        with tracer.start_as_current_span(f"CertGenAccessor.{command_name}") as span:
            span.set_attribute("command", command_name)
            span.set_attribute("peer.service", settings.CERTGEN_AGENT_NAME)
            if args:
                span.set_attribute("service_name", args[0])

            start_time = time.time()

            try:
                reply = self._request_client.send_and_receive(frame)
            except Exception as e:
                certgen_metrics.record_transport_error(command_name)
                logger.error(
                    "certgen_transport_failed",
                    extra={"command": command_name, "error": str(e)},
                )
                raise

            duration = time.time() - start_time

            if not reply:
                certgen_metrics.record_transport_error(command_name)
                logger.error("certgen_empty_reply", extra={"command": command_name})
                raise TransportError(f"Empty reply frame for command {command_name}")

            if is_error_reply(reply):
                message = error_message(reply)
                span.set_attribute("error_message", message)
                certgen_metrics.record_remote_error(command_name, duration)
                logger.warning(
                    "certgen_command_failed",
                    extra={"command": command_name, "error": message},
                )
                raise RemoteOperationError(message)

            certgen_metrics.record_command_succeeded(command_name, duration)
            logger.info(
                "certgen_command_sent",
                extra={
                    "command": command_name,
                    "reply_fields": len(reply),
                    "duration_seconds": duration,
                },
            )

            return list(reply)


def _require_text(name: str, value: str) -> None:
    """Reject empty or non-string arguments before anything is sent."""
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string")
