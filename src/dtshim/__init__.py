"""dtshim -- Device Trust Shim.

Tamper-evident, hash-chained audit logging for devices:

    from dtshim import AuditChain, Actor, Severity, verify_chain

    chain = AuditChain("DEV-1")
    line = chain.append("boot", Actor.SYSTEM, Severity.INFO)
    assert verify_chain([line])
"""
from dtshim.crypto.chain import AuditChain
from dtshim.crypto.sha256 import Digest, Sha256, sha256
from dtshim.crypto.verifier import ChainVerifier, verify_chain
from dtshim.domain.codes import Actor, Severity
from dtshim.domain.entry import LogEntry

__version__ = "0.1.0"

__all__ = [
    "Actor",
    "AuditChain",
    "ChainVerifier",
    "Digest",
    "LogEntry",
    "Severity",
    "Sha256",
    "sha256",
    "verify_chain",
]
