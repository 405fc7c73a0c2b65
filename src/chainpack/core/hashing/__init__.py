# src/chainpack/core/hashing/__init__.py
"""
Fingerprinting de deploy.

    - parameters → digest da invocação (path, func, args)
    - directory  → digest encadeado do conteúdo do diretório, semeado
                   pelo digest da invocação
"""

from .directory import FileEvent, collect_file_events, fold_file_events, generate_directory_hash
from .parameters import InvocationDescriptor, generate_parameter_hash, hash_invocation

__all__ = [
    "FileEvent",
    "InvocationDescriptor",
    "collect_file_events",
    "fold_file_events",
    "generate_directory_hash",
    "generate_parameter_hash",
    "hash_invocation",
]
