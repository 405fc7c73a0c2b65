# src/chainpack/core/hashing/directory.py
"""
Hash encadeado do diretório de chaincode (DirectoryHasher).

O fingerprint final liga parâmetros de invocação e conteúdo de código:
o digest dos parâmetros é a semente, e cada arquivo visitado é dobrado
sobre o digest corrente.

Regra de encadeamento (por arquivo, na ordem de travessia):

    corrente = hex(digest(bytes_do_arquivo + corrente.encode("utf-8")))

A implementação é separada em duas partes:
    - collect_file_events → travessia em profundidade (I/O), produzindo a
      lista ordenada de FileEvent
    - fold_file_events    → dobra pura sobre essa lista

Decisões arquiteturais:
    - Diretórios são sempre percorridos, independente do nome
    - Ao encontrar um diretório, a travessia desce nele antes de continuar
      com as entradas seguintes do diretório atual
    - Qualquer arquivo ilegível ou diretório não listável aborta a operação
      inteira (PackagingIOError); nada é pulado
    - Ordem de travessia é configurável: SORTED (padrão, independente de
      plataforma) ou LISTING (ordem do sistema operacional, não estável)

Invariantes:
    - O resultado depende apenas de (semente, sequência de FileEvent)
    - O conteúdo é usado byte a byte, sem decodificação
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Union

from ..crypto.suite import CryptoSuite, default_suite
from ..errors import packaging_io_error
from ..fs import (
    FileSystem,
    LocalFileSystem,
    PathLike,
    TraversalOrder,
    coerce_order,
    ordered_entries,
)
from ..log import get_logger


@dataclass(frozen=True)
class FileEvent:
    """Arquivo visitado na travessia: caminho relativo (posix) e conteúdo."""

    relative_path: str
    content: bytes


def fold_file_events(seed_hash: str, events: Iterable[FileEvent], suite: CryptoSuite) -> str:
    """Dobra serial de eventos sobre a semente. Função pura."""
    current = seed_hash
    for event in events:
        current = suite.hexdigest(event.content + current.encode("utf-8"))
    return current


def collect_file_events(
    root_dir: PathLike,
    chaincode_dir: PathLike,
    *,
    fs: Optional[FileSystem] = None,
    order: Union[TraversalOrder, str, None] = None,
    logger: Optional[logging.LoggerAdapter] = None,
) -> List[FileEvent]:
    """
    Percorre `root_dir/chaincode_dir` em profundidade e lê cada arquivo.

    Os caminhos relativos dos eventos são relativos a `root_dir`
    (ex.: `chaincode/sub/main.go`).

    Raises:
        PackagingIOError: diretório não listável ou arquivo ilegível.
    """
    fs = fs or LocalFileSystem()
    order = coerce_order(order)
    log = logger or get_logger("hashing")

    events: List[FileEvent] = []
    root = Path(root_dir)

    def visit(relative: PurePosixPath) -> None:
        current_dir = root / relative
        try:
            entries = fs.list_entries(current_dir)
        except OSError as exc:
            raise packaging_io_error(
                path=str(current_dir), operation="listar diretório", reason=str(exc)
            ) from exc

        for entry in ordered_entries(entries, order):
            child = relative / entry.name
            if entry.is_directory:
                visit(child)
                continue
            try:
                content = fs.read_file(entry.absolute_path)
            except OSError as exc:
                raise packaging_io_error(
                    path=str(entry.absolute_path), operation="ler arquivo", reason=str(exc)
                ) from exc
            log.debug("visited %s (%d bytes)", child, len(content))
            events.append(FileEvent(relative_path=str(child), content=content))

    visit(PurePosixPath(Path(chaincode_dir).as_posix()))
    return events


def generate_directory_hash(
    root_dir: PathLike,
    chaincode_dir: PathLike,
    seed_hash: str,
    *,
    suite: Optional[CryptoSuite] = None,
    fs: Optional[FileSystem] = None,
    order: Union[TraversalOrder, str, None] = None,
    logger: Optional[logging.LoggerAdapter] = None,
) -> str:
    """
    Gera o hash do conteúdo de `root_dir/chaincode_dir` encadeado à semente.

    Args:
        root_dir: diretório raiz do projeto.
        chaincode_dir: subdiretório do chaincode, relativo a `root_dir`.
        seed_hash: digest hexadecimal dos parâmetros (ParameterHasher).
        suite: crypto suite; SHA3-256 quando omitida.
        fs: colaborador de file system; disco local quando omitido.
        order: política de travessia; SORTED quando omitida.
        logger: handle de logger; `chainpack.hashing` quando omitido.

    Returns:
        str: fingerprint hexadecimal (invocação + código).

    Raises:
        PackagingIOError: diretório não listável ou arquivo ilegível.
    """
    suite = suite or default_suite()
    log = logger or get_logger("hashing")

    events = collect_file_events(root_dir, chaincode_dir, fs=fs, order=order, logger=log)
    fingerprint = fold_file_events(seed_hash, events, suite)

    log.info(
        "directory hash for %s computed over %d files with %s",
        Path(root_dir) / chaincode_dir,
        len(events),
        suite.name,
    )
    return fingerprint
