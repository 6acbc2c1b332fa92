"""Shared fixtures: an in-process certificate generator and a signing CA."""

from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

from certgen.accessor import CertGenAccessor
from certgen.csr import CertificateSigningRequest
from certgen.transport.local import LocalSyncClient


def _public_der(key) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def _name(common_name: str) -> x509.Name:
    return x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])


class FakeCertGenService:
    """Reference certificate generator speaking the flat frame protocol.

    - Rejects the service name "fail".
    - Generates a fresh keypair for every CSR request.
    - Accepts an imported certificate only for the pending keypair.
    """

    REJECTED_SERVICE = "fail"

    def __init__(self) -> None:
        self.requests: list[list[str]] = []
        self.pending_keys: dict[str, ec.EllipticCurvePrivateKey] = {}
        self.self_signed: dict[str, x509.Certificate] = {}
        self.installed: dict[str, x509.Certificate] = {}

    def __call__(self, frame: list[str]) -> list[str]:
        self.requests.append(frame)
        command, *args = frame

        handlers = {
            "GENERATE_SELFSIGNED_CERTIFICATE": self._generate_self_signed,
            "GENERATE_CSR": self._generate_csr,
            "IMPORT_CERTIFICATE": self._import_certificate,
        }
        handler = handlers.get(command)
        if handler is None:
            return ["ERROR", f"Unknown command {command}"]
        return handler(*args)

    def _generate_self_signed(self, service_name: str) -> list[str]:
        if service_name == self.REJECTED_SERVICE:
            return ["ERROR", f"No configuration for service {service_name}"]

        key = ec.generate_private_key(ec.SECP256R1())
        now = datetime.now(timezone.utc)
        certificate = (
            x509.CertificateBuilder()
            .subject_name(_name(service_name))
            .issuer_name(_name(service_name))
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=30))
            .sign(key, hashes.SHA256())
        )
        self.self_signed[service_name] = certificate
        return ["OK"]

    def _generate_csr(self, service_name: str) -> list[str]:
        if service_name == self.REJECTED_SERVICE:
            return ["ERROR", f"No configuration for service {service_name}"]

        key = ec.generate_private_key(ec.SECP256R1())
        csr = (
            x509.CertificateSigningRequestBuilder()
            .subject_name(_name(service_name))
            .sign(key, hashes.SHA256())
        )
        self.pending_keys[service_name] = key
        return [csr.public_bytes(serialization.Encoding.PEM).decode("utf-8")]

    def _import_certificate(self, service_name: str, certificate_pem: str) -> list[str]:
        key = self.pending_keys.get(service_name)
        if key is None:
            return ["ERROR", f"No pending key for service {service_name}"]

        try:
            certificate = x509.load_pem_x509_certificate(certificate_pem.encode("utf-8"))
        except ValueError:
            return ["ERROR", "Invalid certificate"]

        if _public_der(certificate.public_key()) != _public_der(key.public_key()):
            return ["ERROR", f"Certificate does not match pending key for {service_name}"]

        self.installed[service_name] = certificate
        del self.pending_keys[service_name]
        return ["OK"]


class SigningCA:
    """Minimal CA used by tests to sign CSRs returned by the service."""

    def __init__(self) -> None:
        self.key = ec.generate_private_key(ec.SECP256R1())
        self.name = _name("Test CA")

    def sign(self, csr: CertificateSigningRequest) -> str:
        request = csr.load()
        now = datetime.now(timezone.utc)
        certificate = (
            x509.CertificateBuilder()
            .subject_name(request.subject)
            .issuer_name(self.name)
            .public_key(request.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + timedelta(days=30))
            .sign(self.key, hashes.SHA256())
        )
        return certificate.public_bytes(serialization.Encoding.PEM).decode("utf-8")


@pytest.fixture
def certgen_service() -> FakeCertGenService:
    return FakeCertGenService()


@pytest.fixture
def accessor(certgen_service) -> CertGenAccessor:
    """Accessor wired to the fake service through an in-process transport."""
    return CertGenAccessor(LocalSyncClient(certgen_service, timeout=None))


@pytest.fixture
def signing_ca() -> SigningCA:
    return SigningCA()
