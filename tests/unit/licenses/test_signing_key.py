"""
Unit tests for signing keys and KeyPairStore.
"""

import json

import pytest

from core.domain.exceptions import KeyFormatError
from core.domain.value_objects import KeyKind
from licenses.domain.signing_key import KeyMaterial, KeyPairStore


class TestKeyPairStore:
    """Tests for KeyPairStore."""

    def test_generate(self):
        """Test generating a key pair."""
        private, public = KeyPairStore.generate()

        assert private.kind == KeyKind.PRIVATE
        assert public.kind == KeyKind.PUBLIC
        assert private.public_bytes == public.public_bytes
        assert public.private_bytes is None

    def test_generate_is_random(self):
        """Test two generated pairs differ."""
        first, _ = KeyPairStore.generate()
        second, _ = KeyPairStore.generate()

        assert first != second

    def test_save_load_private(self, private_key):
        """Test private key text round trip."""
        assert KeyPairStore.load_from_text(KeyPairStore.save_to_text(private_key)) == private_key

    def test_save_load_public(self, public_key):
        """Test public key text round trip."""
        assert KeyPairStore.load_from_text(KeyPairStore.save_to_text(public_key)) == public_key

    def test_text_format(self, private_key, public_key):
        """Test key documents carry JWK parameters."""
        private_doc = json.loads(KeyPairStore.save_to_text(private_key))
        public_doc = json.loads(KeyPairStore.save_to_text(public_key))

        assert private_doc["kty"] == "OKP"
        assert private_doc["crv"] == "Ed25519"
        assert set(private_doc) == {"kty", "crv", "x", "d"}
        assert set(public_doc) == {"kty", "crv", "x"}
        assert private_doc["x"] == public_doc["x"]

    def test_save_is_stable(self, private_key):
        """Test saving twice yields identical text."""
        assert KeyPairStore.save_to_text(private_key) == KeyPairStore.save_to_text(private_key)

    def test_derive_public_key_from_text(self, private_key, public_key):
        """Test deriving public key text from private key text."""
        derived = KeyPairStore.derive_public_key(KeyPairStore.save_to_text(private_key))

        assert derived == KeyPairStore.save_to_text(public_key)

    def test_derive_public_key_from_material(self, private_key, public_key):
        """Test deriving public key material from private key material."""
        assert KeyPairStore.derive_public_key(private_key) == public_key

    def test_derive_public_key_rejects_public(self, public_key):
        """Test a public key cannot be used to derive a public key."""
        with pytest.raises(KeyFormatError, match="Expected a private key"):
            KeyPairStore.derive_public_key(KeyPairStore.save_to_text(public_key))

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "not json",
            "[]",
            '{"kty": "RSA", "n": "AQAB"}',
            '{"kty": "OKP", "crv": "X25519", "x": "AAAA"}',
            '{"kty": "OKP", "crv": "Ed25519"}',
            '{"kty": "OKP", "crv": "Ed25519", "x": "AAAA"}',
            '{"kty": "OKP", "crv": "Ed25519", "x": 42}',
        ],
    )
    def test_load_rejects_invalid_text(self, text):
        """Test malformed key documents are rejected."""
        with pytest.raises(KeyFormatError):
            KeyPairStore.load_from_text(text)

    def test_load_rejects_mismatched_halves(self, private_key):
        """Test a private key whose x does not match d is rejected."""
        other, _ = KeyPairStore.generate()
        document = json.loads(KeyPairStore.save_to_text(private_key))
        document["x"] = json.loads(KeyPairStore.save_to_text(other))["x"]

        with pytest.raises(KeyFormatError, match="does not match"):
            KeyPairStore.load_from_text(json.dumps(document))

    def test_load_rejects_non_string(self):
        """Test non-text input is rejected."""
        with pytest.raises(KeyFormatError):
            KeyPairStore.load_from_text(None)


class TestKeyMaterial:
    """Tests for KeyMaterial value object."""

    def test_public_cannot_carry_private_bytes(self, private_key):
        """Test public material with private bytes is rejected."""
        with pytest.raises(KeyFormatError):
            KeyMaterial(
                kind=KeyKind.PUBLIC,
                public_bytes=private_key.public_bytes,
                private_bytes=private_key.private_bytes,
            )

    def test_public_cannot_sign(self, public_key):
        """Test public material refuses to produce a signing key."""
        with pytest.raises(KeyFormatError, match="cannot sign"):
            public_key.signing_key()

    def test_repr_hides_private_bytes(self, private_key):
        """Test repr does not leak the private key."""
        assert KeyPairStore.save_to_text(private_key).split('"d": "')[1][:20] not in repr(
            private_key
        )

    def test_hashable(self, public_key):
        """Test key material can be used in sets."""
        assert len({public_key, public_key.public()}) == 1
