"""Certificate signing request value returned by the certificate generator.

The PEM text is kept verbatim and only decoded when a derived field is
requested, so the accessor never rejects a successful reply on its own.
"""

from dataclasses import dataclass

from cryptography import x509
from cryptography.hazmat.primitives import serialization
from cryptography.x509.oid import NameOID

from certgen.errors import CsrError


@dataclass(frozen=True)
class PublicKey:
    """Public key in PEM (SubjectPublicKeyInfo) form."""

    pem: str


@dataclass(frozen=True)
class CertificateSigningRequest:
    """PEM-encoded CSR generated remotely for a service."""

    pem: str

    def load(self) -> x509.CertificateSigningRequest:
        """Decode the PEM payload.

        Raises:
            CsrError: If the payload is not a valid PEM CSR.
        """
        try:
            return x509.load_pem_x509_csr(self.pem.encode("utf-8"))
        except Exception as e:
            raise CsrError(f"Failed to load certificate signing request: {e}") from e

    @property
    def public_key(self) -> PublicKey:
        """Public key embedded in the request."""
        key_pem = (
            self.load()
            .public_key()
            .public_bytes(
                encoding=serialization.Encoding.PEM,
                format=serialization.PublicFormat.SubjectPublicKeyInfo,
            )
            .decode("utf-8")
        )
        return PublicKey(pem=key_pem)

    @property
    def common_name(self) -> str | None:
        """Subject CN, or None when the subject has no CN."""
        attributes = self.load().subject.get_attributes_for_oid(NameOID.COMMON_NAME)
        if not attributes:
            return None
        value = attributes[0].value
        return value if isinstance(value, str) else value.decode("utf-8")

    @property
    def is_signature_valid(self) -> bool:
        """Whether the request is self-signed by its embedded key."""
        return self.load().is_signature_valid

    def __str__(self) -> str:
        return self.pem
