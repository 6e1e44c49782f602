"""Cryptographic audit chain -- from-scratch SHA-256 and hash chaining.

Public API:
    Digest engine: sha256, Sha256, Digest
    AuditChain: per-device append-only chain state
    Exchange format: encode_entry, decode_entry, EntryFormatError
    verify_chain / ChainVerifier: tamper detection over exported entries
"""

from dtshim.crypto.chain import AuditChain
from dtshim.crypto.codec import (
    EntryFormatError,
    decode_entry,
    encode_entry,
    escape_text,
    extract_digests,
    format_timestamp,
    validate_entry,
)
from dtshim.crypto.hasher import (
    GENESIS_HASH,
    GENESIS_SEED,
    build_payload,
    compute_chain_hash,
    genesis_digest,
    hash_entry,
)
from dtshim.crypto.sha256 import Digest, Sha256, sha256
from dtshim.crypto.verifier import (
    ChainVerificationResult,
    ChainVerifier,
    verify_chain,
)

__all__ = [
    "GENESIS_HASH",
    "GENESIS_SEED",
    "AuditChain",
    "ChainVerificationResult",
    "ChainVerifier",
    "Digest",
    "EntryFormatError",
    "Sha256",
    "build_payload",
    "compute_chain_hash",
    "decode_entry",
    "encode_entry",
    "escape_text",
    "extract_digests",
    "format_timestamp",
    "genesis_digest",
    "hash_entry",
    "sha256",
    "validate_entry",
    "verify_chain",
]
