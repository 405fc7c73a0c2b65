# tests/conftest.py
"""
Fixtures compartilhados para testes do chainpack.

Este módulo define fixtures reutilizáveis que fornecem:
- árvores de chaincode mínimas em `tmp_path`
- um file system fake para injeção de falhas de I/O
- isolamento do logger `chainpack` entre testes

Decisões arquiteturais:
    - Árvores são criadas por teste (tmp_path), nunca compartilhadas
    - Falhas de permissão são simuladas pelo file system fake, pois
      `chmod` não impede leitura quando os testes rodam como root
    - O logger `chainpack` é restaurado após cada teste

Limites explícitos:
    - Não contém lógica de domínio
    - Não valida comportamento (apenas prepara cenários)
"""

import logging
from pathlib import Path
from typing import Dict, List

import pytest

from chainpack.core.fs import DirectoryEntry, LocalFileSystem


@pytest.fixture(autouse=True)
def _isolated_chainpack_logger():
    """Restaura handlers/nível/propagação do logger `chainpack` após cada teste."""
    root = logging.getLogger("chainpack")
    handlers = list(root.handlers)
    level = root.level
    propagate = root.propagate
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    root.propagate = propagate


def write_tree(root: Path, files: Dict[str, bytes]) -> Path:
    """Cria arquivos (caminho relativo → conteúdo) sob `root`."""
    for rel, content in files.items():
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root


@pytest.fixture
def make_tree():
    """Fábrica de árvores: make_tree(root, {"rel/path": b"conteúdo"})."""
    return write_tree


@pytest.fixture
def proj(tmp_path: Path) -> Path:
    """
    Projeto do cenário ponta a ponta:

        proj/
          chaincode/
            main.go   ("package main")
            skip.md
    """
    return write_tree(
        tmp_path / "proj",
        {
            "chaincode/main.go": b"package main",
            "chaincode/skip.md": b"# notes",
        },
    )


@pytest.fixture
def mixed_tree(tmp_path: Path) -> Path:
    """Árvore com arquivos mantidos e descartados pelo filtro do pacote."""
    return write_tree(
        tmp_path / "mixed",
        {
            "main.go": b"package main\n",
            "config.yaml": b"key: value\n",
            "notes.txt": b"not shipped\n",
            "Dockerfile": b"FROM golang:1.21\n",
        },
    )


class FailingFileSystem(LocalFileSystem):
    """
    File system local que falha para caminhos específicos.

    - unreadable: nomes de arquivo cuja leitura levanta PermissionError
    - unlistable: nomes de diretório cuja listagem levanta PermissionError
    """

    def __init__(self, *, unreadable=(), unlistable=()):
        self.unreadable = set(unreadable)
        self.unlistable = set(unlistable)
        self.reads: List[str] = []

    def list_entries(self, path) -> List[DirectoryEntry]:
        if Path(path).name in self.unlistable:
            raise PermissionError(13, "Permission denied", str(path))
        return super().list_entries(path)

    def read_file(self, path) -> bytes:
        if Path(path).name in self.unreadable:
            raise PermissionError(13, "Permission denied", str(path))
        self.reads.append(Path(path).name)
        return super().read_file(path)


class ReversedListingFileSystem(LocalFileSystem):
    """File system local cuja listagem devolve as entradas em ordem decrescente."""

    def list_entries(self, path) -> List[DirectoryEntry]:
        return sorted(super().list_entries(path), key=lambda e: e.name, reverse=True)


@pytest.fixture
def failing_fs_factory():
    return FailingFileSystem


@pytest.fixture
def reversed_fs() -> ReversedListingFileSystem:
    return ReversedListingFileSystem()
