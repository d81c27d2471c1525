"""
Keyed digest the payment switch uses to authenticate redirect requests.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .catalog import ConfigError

if TYPE_CHECKING:
    from .parameters import TransactionRequest

__all__ = ["DEFAULT_DIGEST_ALGORITHM", "DigestSigner"]

# SHA-1 is weak, but it is the only algorithm the PS accepts.
DEFAULT_DIGEST_ALGORITHM = "sha1"


@dataclass(frozen=True)
class DigestSigner:
    """
    Stateless signer: ``hash(canonical + ":" + secret_key)`` as lowercase hex.
    """

    algorithm: str = DEFAULT_DIGEST_ALGORITHM

    def __post_init__(self) -> None:
        normalized = self.algorithm.strip().lower()
        if normalized not in hashlib.algorithms_available:
            raise ConfigError(f"Unsupported digest algorithm '{self.algorithm}'")
        object.__setattr__(self, "algorithm", normalized)

    def compute_digest(self, canonical: str, secret_key: str) -> str:
        hasher = hashlib.new(self.algorithm)
        hasher.update(f"{canonical}:{secret_key}".encode("utf-8"))
        return hasher.hexdigest()

    def sign(self, request: "TransactionRequest") -> str:
        return self.compute_digest(request.canonical_string(), request.password)
