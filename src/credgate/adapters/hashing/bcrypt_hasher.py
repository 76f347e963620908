"""
bcrypt secret hasher - Implements SecretHasher protocol.

Digests embed a random salt and the work factor, so the same password
hashes differently on every call while verify() still accepts each digest.
"""

from functools import cached_property

import bcrypt

DEFAULT_COST = 10

# bcrypt reads at most 72 bytes of the secret. Longer secrets are refused, never truncated.
MAX_SECRET_BYTES = 72


class BcryptSecretHasher:
    """
    Implements SecretHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, cost: int = DEFAULT_COST) -> None:
        """
        Args:
            cost: bcrypt work factor (log2 rounds, 4-31)
        """
        self._cost = cost

    @property
    def cost(self) -> int:
        return self._cost

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext secret with a fresh salt.

        Raises:
            ValueError: If the secret exceeds MAX_SECRET_BYTES
        """
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self._cost)).decode()

    def verify(self, plaintext: str, digest: str) -> bool:
        """
        Constant-time check of plaintext against a stored digest.

        A malformed digest or an oversized secret is a mismatch, not an error.
        """
        try:
            return bcrypt.checkpw(_encode(plaintext), digest.encode())
        except ValueError:
            return False

    @cached_property
    def dummy_digest(self) -> str:
        """Same-cost digest used when no stored digest exists."""
        return self.hash("dummy_password_for_timing_safety")


def _encode(plaintext: str) -> bytes:
    secret = plaintext.encode()
    if len(secret) > MAX_SECRET_BYTES:
        raise ValueError(f"Secret exceeds {MAX_SECRET_BYTES} bytes")
    return secret
