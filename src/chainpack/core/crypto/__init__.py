# src/chainpack/core/crypto/__init__.py
"""
Providers criptográficos do chainpack.

    - suite    → contrato CryptoSuite e implementações (hashlib, cryptography)
    - registry → ProviderRegistry e registry padrão
"""

from .registry import ProviderRegistry, default_registry
from .suite import CryptoSuite, CryptographySuite, HashlibSuite, default_suite

__all__ = [
    "CryptoSuite",
    "CryptographySuite",
    "HashlibSuite",
    "ProviderRegistry",
    "default_registry",
    "default_suite",
]
