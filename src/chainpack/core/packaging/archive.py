# src/chainpack/core/packaging/archive.py
"""
Geração do pacote .tar.gz de deploy (ArchiveBuilder).

Pipeline de três estágios, consumidos incrementalmente:

    pack (tarfile, modo stream "w|") → compress (gzip) → write (arquivo destino)

Nenhum estágio acumula a árvore inteira em memória: cada entrada
selecionada pelo filtro é empacotada, comprimida e gravada em sequência.

Decisões arquiteturais:
    - A operação pública é uma corrotina; o trabalho bloqueante roda em
      thread (`asyncio.to_thread`) e o chamador recebe um único resultado
      (o caminho de destino) ou uma única exceção
    - A primeira falha de qualquer estágio aborta o pipeline inteiro
      (ArchivePipelineError com o estágio que falhou)
    - O destino é aberto e fechado por esta operação em todos os caminhos
      de saída; em caso de falha o arquivo parcial é removido
    - Nomes dos membros são relativos a `src_dir`, em formato posix
    - Listagem e leitura passam pelo mesmo `FileSystem` injetado usado no
      hashing; o disco local só é tocado pelo `LocalFileSystem`
    - Membros são gravados com modo fixo (0644 arquivos, 0755 diretórios),
      uid/gid 0 e o mesmo mtime (instante do empacotamento)
    - Symlinks são seguidos, como na travessia de hashing

Limites explícitos:
    - Não garante reprodutibilidade byte a byte (mtime dos membros e do
      cabeçalho gzip variam entre execuções)
    - Cada arquivo selecionado é lido inteiro em memória antes de ser
      empacotado (como no hashing)
    - Não há cancelamento nem timeout (use `asyncio.wait_for` externamente)
"""

from __future__ import annotations

import asyncio
import gzip
import io
import logging
import tarfile
import time
import zlib
from contextlib import suppress
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Iterator, Optional, Tuple, Union

from ..errors import archive_pipeline_error, packaging_io_error
from ..fs import (
    DirectoryEntry,
    FileSystem,
    LocalFileSystem,
    PathLike,
    TraversalOrder,
    coerce_order,
    ordered_entries,
)
from ..log import get_logger
from .filters import should_include


STAGE_PACK = "pack"
STAGE_COMPRESS = "compress"
STAGE_WRITE = "write"

FILE_MODE = 0o644
DIR_MODE = 0o755


class _StageFailure(Exception):
    """Falha interna marcada com o estágio de origem."""

    def __init__(self, stage: str, cause: BaseException):
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause


class _WriteStage:
    """Estágio final: grava bytes comprimidos no destino."""

    def __init__(self, raw: BinaryIO):
        self._raw = raw

    def write(self, data: bytes) -> int:
        try:
            return self._raw.write(data)
        except OSError as exc:
            raise _StageFailure(STAGE_WRITE, exc) from exc

    def flush(self) -> None:
        try:
            self._raw.flush()
        except OSError as exc:
            raise _StageFailure(STAGE_WRITE, exc) from exc

    def close(self) -> None:
        try:
            self._raw.close()
        except OSError as exc:
            raise _StageFailure(STAGE_WRITE, exc) from exc

    def abort(self) -> None:
        # a primeira falha já está sendo propagada
        with suppress(OSError):
            self._raw.close()


class _CompressStage:
    """Estágio intermediário: comprime o stream tar com gzip."""

    def __init__(self, sink: _WriteStage):
        try:
            self._gz = gzip.GzipFile(fileobj=sink, mode="wb")
        except zlib.error as exc:
            raise _StageFailure(STAGE_COMPRESS, exc) from exc

    def write(self, data: bytes) -> int:
        try:
            return self._gz.write(data)
        except zlib.error as exc:
            raise _StageFailure(STAGE_COMPRESS, exc) from exc

    def close(self) -> None:
        try:
            self._gz.close()
        except zlib.error as exc:
            raise _StageFailure(STAGE_COMPRESS, exc) from exc

    def abort(self) -> None:
        # a primeira falha já está sendo propagada
        with suppress(_StageFailure, OSError, ValueError, zlib.error):
            self._gz.close()


def iter_archive_entries(
    src_dir: PathLike,
    *,
    fs: Optional[FileSystem] = None,
    order: Union[TraversalOrder, str, None] = None,
) -> Iterator[Tuple[DirectoryEntry, str]]:
    """
    Percorre `src_dir` em profundidade produzindo (entrada, nome no arquivo)
    para cada entrada aceita por `should_include`.

    Diretórios são produzidos antes do seu conteúdo. A listagem é lazy:
    cada diretório só é lido quando a travessia chega nele.
    """
    fs = fs or LocalFileSystem()
    order = coerce_order(order)
    root = Path(src_dir)

    def walk(relative: PurePosixPath) -> Iterator[Tuple[DirectoryEntry, str]]:
        for entry in ordered_entries(fs.list_entries(root / relative), order):
            if not should_include(entry):
                continue
            arcname = relative / entry.name
            yield entry, str(arcname)
            if entry.is_directory:
                yield from walk(arcname)

    yield from walk(PurePosixPath("."))


def _member(entry: DirectoryEntry, arcname: str, mtime: int, size: int = 0) -> tarfile.TarInfo:
    info = tarfile.TarInfo(name=arcname)
    info.mtime = mtime
    if entry.is_directory:
        info.type = tarfile.DIRTYPE
        info.mode = DIR_MODE
    else:
        info.mode = FILE_MODE
        info.size = size
    return info


def _pack(
    src_dir: Path,
    out: _CompressStage,
    *,
    fs: FileSystem,
    order: Union[TraversalOrder, str, None],
    log: logging.LoggerAdapter,
) -> int:
    count = 0
    mtime = int(time.time())
    with tarfile.open(fileobj=out, mode="w|") as tar:
        for entry, arcname in iter_archive_entries(src_dir, fs=fs, order=order):
            if entry.is_directory:
                tar.addfile(_member(entry, arcname, mtime))
            else:
                content = fs.read_file(entry.absolute_path)
                tar.addfile(_member(entry, arcname, mtime, len(content)), io.BytesIO(content))
            log.debug("packed %s", arcname)
            count += 1
    return count


def _abort(compressor: Optional[_CompressStage], sink: _WriteStage, dest: Path) -> None:
    if compressor is not None:
        compressor.abort()
    sink.abort()
    dest.unlink(missing_ok=True)


def _write_tar_gz(
    src_dir: Path,
    dest_path: Path,
    *,
    fs: FileSystem,
    order: Union[TraversalOrder, str, None],
    log: logging.LoggerAdapter,
) -> int:
    try:
        raw = dest_path.open("wb")
    except OSError as exc:
        raise packaging_io_error(
            path=str(dest_path), operation="abrir destino", reason=str(exc)
        ) from exc

    sink = _WriteStage(raw)
    compressor: Optional[_CompressStage] = None
    try:
        compressor = _CompressStage(sink)
        count = _pack(src_dir, compressor, fs=fs, order=order, log=log)
        compressor.close()
        sink.close()
    except _StageFailure as failure:
        _abort(compressor, sink, dest_path)
        raise archive_pipeline_error(
            stage=failure.stage, dest_path=str(dest_path), reason=str(failure.cause)
        ) from failure.cause
    except (OSError, tarfile.TarError) as exc:
        _abort(compressor, sink, dest_path)
        raise archive_pipeline_error(
            stage=STAGE_PACK, dest_path=str(dest_path), reason=str(exc)
        ) from exc
    except BaseException:
        _abort(compressor, sink, dest_path)
        raise

    return count


async def generate_tar_gz(
    src_dir: PathLike,
    dest_path: PathLike,
    *,
    fs: Optional[FileSystem] = None,
    order: Union[TraversalOrder, str, None] = None,
    logger: Optional[logging.LoggerAdapter] = None,
) -> str:
    """
    Cria um .tar.gz com o conteúdo filtrado de `src_dir` em `dest_path`.

    Args:
        src_dir: diretório de origem; nomes no arquivo são relativos a ele.
        dest_path: arquivo de destino (sobrescrito se existir).
        fs: colaborador usado para listar diretórios e ler o conteúdo dos
            membros; disco local quando omitido.
        order: política de travessia; SORTED quando omitida.
        logger: handle de logger; `chainpack.packaging` quando omitido.

    Returns:
        str: `dest_path`, após o destino confirmar o fechamento do stream.

    Raises:
        PackagingIOError: destino não pôde ser aberto para escrita.
        ArchivePipelineError: falha em pack, compress ou write.
    """
    log = logger or get_logger("packaging")
    src = Path(src_dir)
    dest = Path(dest_path)

    count = await asyncio.to_thread(
        _write_tar_gz, src, dest, fs=fs or LocalFileSystem(), order=order, log=log
    )

    log.info("wrote %s with %d entries from %s", dest, count, src)
    return str(dest_path)


def build_tar_gz(
    src_dir: PathLike,
    dest_path: PathLike,
    *,
    fs: Optional[FileSystem] = None,
    order: Union[TraversalOrder, str, None] = None,
    logger: Optional[logging.LoggerAdapter] = None,
) -> str:
    """Wrapper síncrono de `generate_tar_gz` (não usar com loop em execução)."""
    return asyncio.run(generate_tar_gz(src_dir, dest_path, fs=fs, order=order, logger=logger))
