"""
License key hashing.

Raw license keys are never persisted; every store is keyed by the
SHA-256 digest computed here.
"""

import hashlib


def hash_license_key(raw_key: str) -> str:
    """
    Compute the storage identifier for a raw license key.

    Args:
        raw_key: License key as supplied by the client

    Returns:
        Hex-encoded SHA-256 digest (64 chars)
    """
    return hashlib.sha256(raw_key.encode()).hexdigest()


def limiter_key(raw_key: str, caller_address: str) -> str:
    """
    Compute the rate limiter key for a (license key, caller) pair.

    Args:
        raw_key: License key as supplied by the client
        caller_address: Remote address of the caller

    Returns:
        Hex-encoded SHA-256 digest of ``key|address``
    """
    combined = f"{raw_key.strip()}|{caller_address.strip()}"
    return hashlib.sha256(combined.encode()).hexdigest()
