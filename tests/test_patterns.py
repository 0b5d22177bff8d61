# SPDX-License-Identifier: Apache-2.0
# Copyright (C) 2024-2026 The Birthmark Standard Foundation

"""
Tests for pattern-based field extraction.
"""

import pytest

from hipcert.spki import PatternMatch, PatternNotFound, extract, find
from hipcert.spki import patterns


class TestFind:
    """Test first-match lookup."""

    def test_find_returns_span(self):
        """Test that the span covers the first match."""
        span = find("subject", "(cert (subject (hash hit ::1)))")

        assert span == PatternMatch(start=7, end=14)

    def test_find_first_match_only(self):
        """Test that only the leftmost occurrence is reported."""
        span = find(r"\|[A-Z]*\|", "|AB| |CD|")

        assert (span.start, span.end) == (0, 4)

    def test_find_missing_raises(self):
        """Test that a missing pattern raises with the field name."""
        with pytest.raises(PatternNotFound) as exc_info:
            find("issuer", "(cert )", "issuer")

        assert exc_info.value.field == "issuer"

    def test_find_accepts_compiled_pattern(self):
        span = find(patterns.RSA_TAG, "(public_key (rsa-pkcs1-sha1 ))")

        assert span.start == 13

    def test_contains(self):
        assert patterns.contains("cert", "(cert )")
        assert not patterns.contains("sequence", "(cert )")


class TestExtract:
    """Test substring extraction with anchor stripping."""

    def test_extract_strips_anchors(self):
        """Test that anchor characters are dropped from both ends."""
        value = extract(patterns.RSA_EXPONENT, "(e #010001#)", "exponent", strip=(1, 1))

        assert value == "010001"

    def test_extract_empty_field(self):
        """Test that an empty delimited field yields an empty string."""
        value = extract(patterns.RSA_EXPONENT, "(e ##)", "exponent", strip=(1, 1))

        assert value == ""

    def test_extract_dsa_field(self):
        text = "(dsa-pkcs1-sha1 (p |AAEC|)(q |AwQF|))"

        assert extract(patterns.DSA_Q, text, "q", strip=(4, 1)) == "AwQF"

    def test_extract_signature_fields(self):
        """Test that the hash and signature fields are told apart."""
        text = "(signature (hash sha1 |aGFzaA==|)|c2lnbmF0dXJl|)"

        assert extract(patterns.SIGNATURE_HASH, text, "hash", strip=(1, 1)) == "aGFzaA=="
        assert extract(patterns.SIGNATURE, text, "signature", strip=(2, 1)) == "c2lnbmF0dXJl"


class TestAlgorithmTags:
    """Test the algorithm tag patterns."""

    def test_dsa_tag_not_inside_ecdsa(self):
        """Test that the DSA tag does not match inside an ECDSA tag."""
        assert not patterns.contains(patterns.DSA_TAG, "(ecdsa-pkcs1-sha1 )")
        assert patterns.contains(patterns.DSA_TAG, "(dsa-pkcs1-sha1 )")

    def test_ecdsa_tag(self):
        assert patterns.contains(patterns.ECDSA_TAG, "(public_key (ecdsa-sha256 ))")
        assert not patterns.contains(patterns.ECDSA_TAG, "(public_key (ecdsa ))")


class TestSequencePatterns:
    """Test the whole-sequence patterns against a certificate blob."""

    BLOB = (
        "(sequence (public_key (rsa-pkcs1-sha1 (e #03#)(n |AQID|)))"
        '(cert (issuer (hash hit 2001:10::1))(not-after "2010-01-01_00:00:00"))'
        "(signature (hash sha1 |AAAA|)|BBBB|))"
    )

    def test_public_key_sequence(self):
        value = extract(patterns.PUBLIC_KEY_SEQUENCE, self.BLOB, "public_key")

        assert value == "(public_key (rsa-pkcs1-sha1 (e #03#)(n |AQID|)))"

    def test_cert_sequence(self):
        """Test that the cert sequence stops at its own closing quote."""
        value = extract(patterns.CERT_SEQUENCE, self.BLOB, "cert")

        assert value == '(cert (issuer (hash hit 2001:10::1))(not-after "2010-01-01_00:00:00"))'

    def test_signature_sequence(self):
        """Test that the signature match takes the enclosing paren too."""
        value = extract(patterns.SIGNATURE_SEQUENCE, self.BLOB, "signature")

        assert value == "(signature (hash sha1 |AAAA|)|BBBB|))"
