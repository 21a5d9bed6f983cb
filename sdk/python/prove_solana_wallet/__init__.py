from .config import DEFAULT_CONFIG, Config, cluster_api_url, get_cluster_url
from .errors import (
    ConfigurationError,
    ExpiredProofError,
    InvalidProofStructureError,
    MalformedEvidenceError,
    NetworkError,
    ReplayError,
    SignatureError,
    SigningError,
    WalletProofError,
)
from .gateway import LedgerGateway, RpcGateway, open_gateway, resolve_gateway
from .keys import (
    ExternalKey,
    KeyMaterial,
    OwnedKey,
    SignCallback,
    SignMessageFn,
    default_signer,
    sign_detached,
    verify_detached,
)
from .message import create, verify
from .report import VerifyFailureCode, VerifyReport, verify_message_report, verify_transaction_report
from .schemes import MessageProof, ProofScheme, TransactionProof
from .transaction import (
    check_recent_block,
    check_signatures,
    check_static,
    check_transaction_not_broadcast,
    check_transaction_parameters,
    decode_evidence,
    make_transaction,
    prove_transaction,
    verify_transaction,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "cluster_api_url",
    "get_cluster_url",
    "ConfigurationError",
    "ExpiredProofError",
    "InvalidProofStructureError",
    "MalformedEvidenceError",
    "NetworkError",
    "ReplayError",
    "SignatureError",
    "SigningError",
    "WalletProofError",
    "LedgerGateway",
    "RpcGateway",
    "open_gateway",
    "resolve_gateway",
    "ExternalKey",
    "KeyMaterial",
    "OwnedKey",
    "SignCallback",
    "SignMessageFn",
    "default_signer",
    "sign_detached",
    "verify_detached",
    "create",
    "verify",
    "VerifyFailureCode",
    "VerifyReport",
    "verify_message_report",
    "verify_transaction_report",
    "MessageProof",
    "ProofScheme",
    "TransactionProof",
    "check_recent_block",
    "check_signatures",
    "check_static",
    "check_transaction_not_broadcast",
    "check_transaction_parameters",
    "decode_evidence",
    "make_transaction",
    "prove_transaction",
    "verify_transaction",
]
