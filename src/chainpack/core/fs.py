# src/chainpack/core/fs.py
"""
Colaborador de file system do chainpack.

Este módulo define o contrato mínimo de acesso a disco consumido pelos
hashers e pelo archiver, além da implementação local padrão.

Operações expostas pelo contrato:
    - list_entries(path) → entradas de um diretório (DirectoryEntry)
    - read_file(path)    → conteúdo integral de um arquivo
    - is_directory(path) → se o caminho aponta para um diretório

Decisões arquiteturais:
    - O contrato é um Protocol (duck typing), permitindo fakes em testes
    - A ordem de travessia é uma política explícita (`TraversalOrder`),
      aplicada sobre o resultado de `list_entries`
    - Nenhuma operação de escrita é necessária para hashing

Limites explícitos:
    - Não trata erros: OSError é propagado para o chamador
    - Não filtra entradas (filtragem é responsabilidade do archiver)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Protocol, Sequence, Union, runtime_checkable


PathLike = Union[str, Path]


class EntryKind(str, Enum):
    """Tipo de uma entrada de diretório."""

    FILE = "file"
    DIRECTORY = "directory"


class TraversalOrder(str, Enum):
    """
    Política de ordem de travessia de diretórios.

    - LISTING: ordem devolvida pela listagem do sistema operacional.
      Não é garantida estável entre plataformas/file systems.
    - SORTED: entradas ordenadas por nome (ordem de code points),
      independente de plataforma.
    """

    LISTING = "listing"
    SORTED = "sorted"


@dataclass(frozen=True)
class DirectoryEntry:
    """Entrada enumerada durante uma travessia (transiente)."""

    name: str
    kind: EntryKind
    absolute_path: Path

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@runtime_checkable
class FileSystem(Protocol):
    """Contrato mínimo de file system consumido pelo core."""

    def list_entries(self, path: PathLike) -> List[DirectoryEntry]:
        ...

    def read_file(self, path: PathLike) -> bytes:
        ...

    def is_directory(self, path: PathLike) -> bool:
        ...


class LocalFileSystem:
    """Implementação padrão sobre o disco local (segue symlinks, como `stat`)."""

    def list_entries(self, path: PathLike) -> List[DirectoryEntry]:
        base = Path(path)
        entries: List[DirectoryEntry] = []
        for name in os.listdir(base):
            current = base / name
            kind = EntryKind.DIRECTORY if current.is_dir() else EntryKind.FILE
            entries.append(
                DirectoryEntry(name=name, kind=kind, absolute_path=current.absolute())
            )
        return entries

    def read_file(self, path: PathLike) -> bytes:
        return Path(path).read_bytes()

    def is_directory(self, path: PathLike) -> bool:
        return Path(path).is_dir()


def ordered_entries(
    entries: Sequence[DirectoryEntry], order: TraversalOrder
) -> List[DirectoryEntry]:
    """Aplica a política de ordem sobre uma listagem de diretório."""
    if order is TraversalOrder.SORTED:
        return sorted(entries, key=lambda e: e.name)
    return list(entries)


def coerce_order(order: Union[TraversalOrder, str, None]) -> TraversalOrder:
    """Normaliza `order` (enum, string ou None → SORTED)."""
    if order is None:
        return TraversalOrder.SORTED
    return TraversalOrder(order)
