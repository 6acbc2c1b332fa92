from backend.src.certgen.commands import COMMAND_ARITY, Command
from backend.src.certgen.csr import CertificateSigningRequest
from backend.src.certgen.transport.local import LocalSyncClient, RequestHandler
from backend.src.shared.config import Settings
from backend.src.shared.observability import setup_observability

# Pydantic Settings
Settings.model_config
Settings.APP_ENV
Settings.LOG_LEVEL

# Wire vocabulary
Command.GENERATE_SELFSIGNED_CERTIFICATE
Command.GENERATE_CSR
Command.IMPORT_CERTIFICATE
COMMAND_ARITY

# CSR value accessors for callers
CertificateSigningRequest.common_name
CertificateSigningRequest.is_signature_valid

# Transport typing
RequestHandler

# Observability entry point, called by the embedding process
setup_observability

# Transport lifecycle for embedding processes
LocalSyncClient.close
LocalSyncClient.timeout
