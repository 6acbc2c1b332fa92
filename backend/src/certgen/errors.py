"""Failure taxonomy for certificate generator commands."""


class CertGenError(Exception):
    """Base class for certificate generator accessor failures."""

    pass


class RemoteOperationError(CertGenError):
    """Raised when the remote service rejects a command with the error sentinel."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(CertGenError):
    """Raised when a request could not be delivered or its reply is unusable."""

    pass


class CsrError(CertGenError):
    """Raised when a CSR payload cannot be decoded."""

    pass
