"""
Unit tests for signature verification.
"""

from licensegate.tokens import decode_token, verify_signature
from licensegate.types import ErrorCode


class TestVerifySignature:
    """Test cases for verify_signature."""

    def test_valid_signature(self, token_factory, key_pair):
        """Test a token signed by the configured key."""
        decoded = decode_token(token_factory.create_token())

        assert verify_signature(decoded, key_pair.public_bytes) is None

    def test_wrong_key(self, token_factory, other_key_pair):
        """Test a token verified against an unrelated key."""
        decoded = decode_token(token_factory.create_token())

        error = verify_signature(decoded, other_key_pair.public_bytes)

        assert error is not None
        assert error.code == ErrorCode.SIGNATURE_VERIFICATION_FAILED

    def test_tampered_payload(self, token_factory, key_pair):
        """Test a payload swapped in after signing."""
        original = token_factory.create_token()
        forged = token_factory.create_token(token_factory.default_payload(kind="enterprise"))
        header_b64, _, signature_b64 = original.split(".")
        _, forged_payload_b64, _ = forged.split(".")

        decoded = decode_token(f"{header_b64}.{forged_payload_b64}.{signature_b64}")
        error = verify_signature(decoded, key_pair.public_bytes)

        assert error.code == ErrorCode.SIGNATURE_VERIFICATION_FAILED

    def test_zero_signature(self, token_factory, key_pair):
        """Test an all-zero signature of the right length."""
        decoded = decode_token(token_factory.create_token(signature=bytes(64)))

        error = verify_signature(decoded, key_pair.public_bytes)

        assert error.code == ErrorCode.SIGNATURE_VERIFICATION_FAILED

    def test_malformed_key_folds_into_failure(self, token_factory):
        """Test key bytes the primitive rejects outright."""
        decoded = decode_token(token_factory.create_token())

        error = verify_signature(decoded, b"short")

        assert error.code == ErrorCode.SIGNATURE_VERIFICATION_FAILED
        assert error.message == "Signature verification failed"
