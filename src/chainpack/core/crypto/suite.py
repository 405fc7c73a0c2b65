# src/chainpack/core/crypto/suite.py
"""
Crypto suites do chainpack.

Uma CryptoSuite fornece ao core uma única capacidade: `digest(bytes) -> bytes`.
O core é agnóstico ao algoritmo; trocar de suite altera os valores de
fingerprint, mas não o contrato algorítmico dos hashers.

Implementações:
    - HashlibSuite      → algoritmos do `hashlib` (sha3_256 é o padrão)
    - CryptographySuite → algoritmos de `cryptography.hazmat.primitives.hashes`

Limites explícitos:
    - Não implementa primitivas criptográficas (apenas delega)
    - Não implementa assinatura, cifragem ou gestão de chaves
"""

from __future__ import annotations

import hashlib
from typing import Protocol, runtime_checkable

from cryptography.hazmat.primitives import hashes


@runtime_checkable
class CryptoSuite(Protocol):
    """Contrato mínimo de um provider de hash."""

    name: str

    def digest(self, data: bytes) -> bytes:
        ...

    def hexdigest(self, data: bytes) -> str:
        ...


class HashlibSuite:
    """Suite baseada em `hashlib.new(algorithm)`."""

    def __init__(self, algorithm: str = "sha3_256"):
        # falha cedo para algoritmo inexistente
        hashlib.new(algorithm)
        self.algorithm = algorithm
        self.name = algorithm

    def digest(self, data: bytes) -> bytes:
        return hashlib.new(self.algorithm, data).digest()

    def hexdigest(self, data: bytes) -> str:
        return self.digest(data).hex()

    def __repr__(self) -> str:
        return f"HashlibSuite({self.algorithm!r})"


_CRYPTOGRAPHY_ALGORITHMS = {
    "sha3_256": hashes.SHA3_256,
    "sha3_384": hashes.SHA3_384,
    "sha256": hashes.SHA256,
}


class CryptographySuite:
    """Suite baseada em `cryptography` (mesmos valores que hashlib para o mesmo algoritmo)."""

    def __init__(self, algorithm: str = "sha3_256"):
        if algorithm not in _CRYPTOGRAPHY_ALGORITHMS:
            raise ValueError(
                f"Unsupported algorithm for CryptographySuite: {algorithm!r} "
                f"(expected one of {sorted(_CRYPTOGRAPHY_ALGORITHMS)})"
            )
        self.algorithm = algorithm
        self.name = f"cryptography.{algorithm}"

    def digest(self, data: bytes) -> bytes:
        h = hashes.Hash(_CRYPTOGRAPHY_ALGORITHMS[self.algorithm]())
        h.update(data)
        return h.finalize()

    def hexdigest(self, data: bytes) -> str:
        return self.digest(data).hex()

    def __repr__(self) -> str:
        return f"CryptographySuite({self.algorithm!r})"


def default_suite() -> HashlibSuite:
    """Suite padrão do chainpack: SHA3-256."""
    return HashlibSuite("sha3_256")
