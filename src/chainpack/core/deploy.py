# src/chainpack/core/deploy.py
"""
Raiz de composição do chainpack.

O `DeploymentPackager` recebe settings explícitas, resolve a crypto suite
pelo `ProviderRegistry`, cria os handles de logger e encadeia os três
componentes do core:

    1. generate_parameter_hash  → semente (invocação)
    2. generate_directory_hash  → fingerprint (invocação + código)
    3. generate_tar_gz          → pacote filtrado de `root_dir`

O resultado é um `DeploymentPackage` imutável, pronto para ser combinado
numa transação de deploy (combinação fora do escopo deste pacote).

Limites explícitos:
    - Não transmite o pacote nem abre conexões
    - Não persiste o resultado
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .config.settings import ChainpackSettings
from .crypto.registry import ProviderRegistry, default_registry
from .crypto.suite import CryptoSuite
from .endpoint import Endpoint
from .fs import FileSystem, LocalFileSystem, PathLike
from .hashing.directory import generate_directory_hash
from .hashing.parameters import InvocationDescriptor, hash_invocation
from .log import get_logger
from .packaging.archive import generate_tar_gz
from .utils import Timestamp, generate_timestamp


@dataclass(frozen=True)
class DeploymentPackage:
    """
    Unidade de deploy produzida pelo packager.

    - parameter_hash: digest da invocação (semente)
    - fingerprint: digest da invocação + conteúdo do chaincode
    - archive_path: caminho do .tar.gz gerado
    - archive_sha256: SHA-256 do arquivo gerado (integridade do transporte)
    - created_at: instante de criação
    - metadata: suite, ordem de travessia, hash de configuração
    """

    parameter_hash: str
    fingerprint: str
    archive_path: str
    archive_sha256: str
    created_at: Timestamp
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "parameter_hash": self.parameter_hash,
            "fingerprint": self.fingerprint,
            "archive_path": self.archive_path,
            "archive_sha256": self.archive_sha256,
            "created_at": self.created_at.to_dict(),
            "metadata": dict(self.metadata),
        }


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


class DeploymentPackager:
    """Encadeia hashing e empacotamento a partir de settings explícitas."""

    def __init__(
        self,
        settings: ChainpackSettings,
        *,
        registry: Optional[ProviderRegistry[CryptoSuite]] = None,
        fs: Optional[FileSystem] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.settings = settings
        self.registry = registry or default_registry()
        self.suite: CryptoSuite = self.registry.create(settings.crypto_suite)
        self.fs: FileSystem = fs or LocalFileSystem()
        self.log = get_logger("deploy", logger)
        self._hashing_log = get_logger("hashing", logger)
        self._packaging_log = get_logger("packaging", logger)

    def _hashes(self, invocation: InvocationDescriptor, root_dir: PathLike, chaincode_dir: PathLike) -> Tuple[str, str]:
        seed = hash_invocation(invocation, suite=self.suite)
        fingerprint = generate_directory_hash(
            root_dir,
            chaincode_dir,
            seed,
            suite=self.suite,
            fs=self.fs,
            order=self.settings.traversal_order,
            logger=self._hashing_log,
        )
        return seed, fingerprint

    def fingerprint(self, invocation: InvocationDescriptor, *, root_dir: PathLike, chaincode_dir: PathLike) -> str:
        """Fingerprint síncrono (sem gerar pacote)."""
        return self._hashes(invocation, root_dir, chaincode_dir)[1]

    async def package(
        self,
        invocation: InvocationDescriptor,
        *,
        root_dir: PathLike,
        chaincode_dir: PathLike,
        dest_path: PathLike,
        peer: Optional[Endpoint] = None,
    ) -> DeploymentPackage:
        """
        Produz fingerprint e pacote para uma invocação.

        Hashing, arquivamento e o SHA-256 do pacote rodam em threads; o loop
        do chamador permanece livre durante toda a operação.

        `peer`, quando informado, é registrado nos metadados (addr e
        protocolo); nenhuma conexão é aberta.

        Raises:
            PackagingIOError: falha de leitura/listagem ou destino inválido.
            ArchivePipelineError: falha em um estágio do arquivamento.
        """
        seed, fingerprint = await asyncio.to_thread(self._hashes, invocation, root_dir, chaincode_dir)

        archive_path = await generate_tar_gz(
            root_dir,
            dest_path,
            fs=self.fs,
            order=self.settings.traversal_order,
            logger=self._packaging_log,
        )
        archive_sha256 = await asyncio.to_thread(_sha256_file, Path(archive_path))

        metadata: Dict[str, Any] = {
            "crypto_suite": self.suite.name,
            "traversal_order": self.settings.traversal_order.value,
            "config_hash": self.settings.config_hash,
            "entry_point": invocation.entry_point,
        }
        if peer is not None:
            metadata["peer"] = {"addr": peer.addr, "protocol": peer.protocol}

        package = DeploymentPackage(
            parameter_hash=seed,
            fingerprint=fingerprint,
            archive_path=archive_path,
            archive_sha256=archive_sha256,
            created_at=generate_timestamp(),
            metadata=metadata,
        )
        self.log.info("packaged %s as %s", invocation.code_path, fingerprint)
        return package
