"""
Request signing for the Sangfor AC management API.

Every request carries a fresh random nonce and the MD5 digest of the shared
secret concatenated with that nonce. The appliance recomputes the digest from
its own copy of the secret to authenticate the caller.
"""

import hashlib
import hmac
import random
from typing import Optional, Tuple


class Signer:
    """
    Produces nonce/digest pairs for outgoing requests.

    The random generator belongs to the signer instance, so a seeded
    ``random.Random`` gives reproducible nonces. Nonces are not
    cryptographically secure; the secret is what authenticates the caller.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        """
        Initialize signer.

        Args:
            rng: Random generator used for nonces (defaults to a fresh,
                OS-seeded ``random.Random``)
        """
        self.rng = rng if rng is not None else random.Random()

    def nonce(self) -> str:
        """Generate an unsigned 64-bit nonce rendered in decimal."""
        return str(self.rng.getrandbits(64))

    @staticmethod
    def digest(secret: str, nonce: str) -> str:
        """
        Compute the digest for a secret and nonce.

        Format: MD5(secret + nonce), lowercase hex.

        Args:
            secret: Shared secret configured on the appliance
            nonce: Nonce sent alongside the digest

        Returns:
            Hex-encoded 128-bit digest
        """
        return hashlib.md5((secret + nonce).encode('utf-8')).hexdigest()

    def sign(self, secret: str) -> Tuple[str, str]:
        """
        Generate a fresh nonce and its digest.

        Args:
            secret: Shared secret configured on the appliance

        Returns:
            Tuple of (nonce, digest)
        """
        nonce = self.nonce()
        return nonce, self.digest(secret, nonce)

    def verify(self, secret: str, nonce: str, digest: str) -> bool:
        """
        Check a digest the way the appliance does.

        Args:
            secret: Shared secret
            nonce: Nonce received with the request
            digest: Hex digest received with the request

        Returns:
            True if the digest matches
        """
        expected = self.digest(secret, nonce)
        return hmac.compare_digest(expected, digest.lower())
