# src/chainpack/__init__.py
"""
chainpack — fingerprinting e empacotamento de artefatos de deploy.

A partir de um diretório de chaincode e dos parâmetros de invocação,
o chainpack produz:
    - um fingerprint determinístico (invocação + código), usado para
      identificar e deduplicar a unidade de deploy
    - um .tar.gz filtrado do diretório, pronto para transmissão

Fronteira pública:
    - generate_parameter_hash(path, func, args) -> str
    - generate_directory_hash(root_dir, chaincode_dir, seed_hash) -> str
    - generate_tar_gz(src_dir, dest_path) -> awaitable[str]
"""

from .core.hashing.directory import generate_directory_hash
from .core.hashing.parameters import generate_parameter_hash
from .core.packaging.archive import generate_tar_gz

__version__ = "0.1.0"

__all__ = [
    "generate_directory_hash",
    "generate_parameter_hash",
    "generate_tar_gz",
]
