"""
Unit tests for license key hashing.
"""
import hashlib

from core.domain.hashing import hash_license_key, limiter_key


class TestHashLicenseKey:
    """Tests for hash_license_key."""

    def test_sha256_hex(self):
        """Test digest matches SHA-256 of the raw key."""
        assert hash_license_key("ABC-123") == hashlib.sha256(b"ABC-123").hexdigest()

    def test_deterministic_and_64_chars(self):
        """Test same key always yields the same 64-char digest."""
        first = hash_license_key("EDGE-1")
        assert first == hash_license_key("EDGE-1")
        assert len(first) == 64

    def test_different_keys_differ(self):
        """Test distinct keys yield distinct digests."""
        assert hash_license_key("EDGE-1") != hash_license_key("EDGE-2")


class TestLimiterKey:
    """Tests for limiter_key."""

    def test_combines_key_and_address(self):
        """Test limiter key hashes key|address."""
        expected = hashlib.sha256(b"EDGE-1|10.0.0.1").hexdigest()
        assert limiter_key("EDGE-1", "10.0.0.1") == expected

    def test_trims_both_parts(self):
        """Test surrounding whitespace is ignored."""
        assert limiter_key("  EDGE-1 ", " 10.0.0.1\n") == limiter_key("EDGE-1", "10.0.0.1")

    def test_address_scopes_the_key(self):
        """Test the same license from two callers is throttled separately."""
        assert limiter_key("EDGE-1", "10.0.0.1") != limiter_key("EDGE-1", "10.0.0.2")
