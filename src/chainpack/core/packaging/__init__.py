# src/chainpack/core/packaging/__init__.py
"""
Empacotamento do chaincode para transmissão.

    - filters → política de inclusão (extensões + marcador Dockerfile)
    - archive → pipeline pack → gzip → destino
"""

from .archive import build_tar_gz, generate_tar_gz, iter_archive_entries
from .filters import DOCKERFILE_MARKER, KEEP_EXTENSIONS, should_include

__all__ = [
    "DOCKERFILE_MARKER",
    "KEEP_EXTENSIONS",
    "build_tar_gz",
    "generate_tar_gz",
    "iter_archive_entries",
    "should_include",
]
