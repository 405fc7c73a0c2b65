# tests/core/packaging/test_archive.py
"""
Testes do pipeline de geração do pacote .tar.gz.

Os testes asseguram que:
- o pacote contém exatamente as entradas aceitas pelo filtro
- diretórios são sempre percorridos e registrados
- a operação devolve o caminho de destino
- falhas de qualquer estágio abortam o pipeline e removem o parcial
- destino impossível de abrir falha com PackagingIOError

Limites explícitos:
    - Não valida reprodutibilidade byte a byte do .tar.gz
"""

import asyncio
import errno
import gzip
import tarfile
import zlib
from pathlib import Path

import pytest

try:
    from chainpack.core.exceptions import ArchivePipelineError, PackagingIOError
    from chainpack.core.fs import DirectoryEntry, EntryKind
    from chainpack.core.packaging import archive
    from chainpack.core.packaging.archive import build_tar_gz, generate_tar_gz, iter_archive_entries
except Exception as e:  # noqa: BLE001
    generate_tar_gz = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing archive builder. Implement:\n"
            "- src/chainpack/core/packaging/archive.py (generate_tar_gz)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _members(path: Path):
    with tarfile.open(path, "r:gz") as tar:
        return {m.name: m for m in tar.getmembers()}


class _FullDisk:
    """Destino que aceita abrir, mas falha em toda escrita."""

    def __init__(self, raw):
        self._raw = raw

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")

    def flush(self):
        self._raw.flush()

    def close(self):
        self._raw.close()


class _BrokenGzip(gzip.GzipFile):
    def write(self, data):
        raise zlib.error("Error -2 while compressing data")


# ---------------------------------------------------------------------------
# Conteúdo
# ---------------------------------------------------------------------------

def test_contains_only_filtered_entries(mixed_tree: Path, tmp_path: Path):
    """
    Verifica o conteúdo do pacote para a árvore mista.

    Invariantes:
        - main.go, config.yaml e Dockerfile presentes
        - notes.txt ausente
    """
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz(mixed_tree, dest))
    assert set(_members(dest)) == {"main.go", "config.yaml", "Dockerfile"}


def test_member_content_is_preserved(mixed_tree: Path, tmp_path: Path):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz(mixed_tree, dest))
    with tarfile.open(dest, "r:gz") as tar:
        assert tar.extractfile("main.go").read() == b"package main\n"


def test_returns_destination_path(mixed_tree: Path, tmp_path: Path):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    assert asyncio.run(generate_tar_gz(mixed_tree, dest)) == str(dest)


def test_directories_are_recorded_and_descended(tmp_path: Path, make_tree):
    """Um diretório com nome de arquivo excluído continua sendo percorrido."""
    _require_imports()
    src = make_tree(tmp_path / "src", {"notes.txt/inner.go": b"x", "pkg/util.go": b"y", "pkg/README.md": b"z"})
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz(src, dest))
    members = _members(dest)
    assert set(members) == {"notes.txt", "notes.txt/inner.go", "pkg", "pkg/util.go"}
    assert members["pkg"].isdir()
    assert members["pkg/util.go"].isfile()


def test_empty_selection_still_produces_valid_archive(tmp_path: Path, make_tree):
    _require_imports()
    src = make_tree(tmp_path / "src", {"readme.md": b"x"})
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz(src, dest))
    assert _members(dest) == {}


def test_overwrites_existing_destination(mixed_tree: Path, tmp_path: Path):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    dest.write_bytes(b"stale")
    asyncio.run(generate_tar_gz(mixed_tree, dest))
    assert "main.go" in _members(dest)


def test_entries_are_produced_directory_first(tmp_path: Path, make_tree):
    _require_imports()
    src = make_tree(tmp_path / "src", {"b.go": b"", "a/c.go": b""})
    names = [arcname for _, arcname in iter_archive_entries(src)]
    assert names == ["a", "a/c.go", "b.go"]


def test_sync_wrapper(mixed_tree: Path, tmp_path: Path):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    assert build_tar_gz(mixed_tree, dest) == str(dest)
    assert "Dockerfile" in _members(dest)


# ---------------------------------------------------------------------------
# Falhas
# ---------------------------------------------------------------------------

def test_unlistable_directory_fails_pack_stage(tmp_path: Path, make_tree, failing_fs_factory):
    """
    Verifica que falha de listagem aborta o pipeline no estágio `pack`.

    Invariantes:
        - ArchivePipelineError com stage="pack"
        - o destino parcial não permanece em disco
    """
    _require_imports()
    src = make_tree(tmp_path / "src", {"a.go": b"A", "locked/b.go": b"B"})
    dest = tmp_path / "out.tar.gz"
    with pytest.raises(ArchivePipelineError) as excinfo:
        asyncio.run(generate_tar_gz(src, dest, fs=failing_fs_factory(unlistable={"locked"})))
    assert excinfo.value.details["stage"] == "pack"
    assert isinstance(excinfo.value.__cause__, PermissionError)
    assert not dest.exists()


def test_missing_source_fails_pack_stage(tmp_path: Path):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    with pytest.raises(ArchivePipelineError) as excinfo:
        asyncio.run(generate_tar_gz(tmp_path / "nope", dest))
    assert excinfo.value.details["stage"] == "pack"
    assert not dest.exists()


def test_write_failure_fails_write_stage(mixed_tree: Path, tmp_path: Path, monkeypatch):
    _require_imports()
    real_stage = archive._WriteStage
    monkeypatch.setattr(archive, "_WriteStage", lambda raw: real_stage(_FullDisk(raw)))
    dest = tmp_path / "out.tar.gz"
    with pytest.raises(ArchivePipelineError) as excinfo:
        asyncio.run(generate_tar_gz(mixed_tree, dest))
    assert excinfo.value.details["stage"] == "write"
    assert excinfo.value.__cause__.errno == errno.ENOSPC
    assert not dest.exists()


def test_compression_failure_fails_compress_stage(mixed_tree: Path, tmp_path: Path, monkeypatch):
    _require_imports()
    monkeypatch.setattr(archive.gzip, "GzipFile", _BrokenGzip)
    dest = tmp_path / "out.tar.gz"
    with pytest.raises(ArchivePipelineError) as excinfo:
        asyncio.run(generate_tar_gz(mixed_tree, dest))
    assert excinfo.value.details["stage"] == "compress"
    assert not dest.exists()


def test_unopenable_destination_is_io_error(mixed_tree: Path, tmp_path: Path):
    _require_imports()
    dest = tmp_path / "missing-dir" / "out.tar.gz"
    with pytest.raises(PackagingIOError) as excinfo:
        asyncio.run(generate_tar_gz(mixed_tree, dest))
    assert excinfo.value.details["path"] == str(dest)
    assert excinfo.value.details["operation"] == "abrir destino"


def test_unreadable_file_fails_pack_stage(mixed_tree: Path, tmp_path: Path, failing_fs_factory):
    _require_imports()
    dest = tmp_path / "out.tar.gz"
    with pytest.raises(ArchivePipelineError) as excinfo:
        asyncio.run(generate_tar_gz(mixed_tree, dest, fs=failing_fs_factory(unreadable={"main.go"})))
    assert excinfo.value.details["stage"] == "pack"
    assert isinstance(excinfo.value.__cause__, PermissionError)
    assert not dest.exists()


# ---------------------------------------------------------------------------
# File system injetado
# ---------------------------------------------------------------------------

class _MemoryFileSystem:
    """File system em memória: caminho posix absoluto → bytes (ou None para diretório)."""

    def __init__(self, tree):
        self.tree = {Path(k): v for k, v in tree.items()}
        self.reads = []

    def list_entries(self, path):
        base = Path(path)
        if self.tree.get(base, b"") is not None:
            raise NotADirectoryError(20, "Not a directory", str(base))
        return [
            DirectoryEntry(
                name=p.name,
                kind=EntryKind.DIRECTORY if content is None else EntryKind.FILE,
                absolute_path=p,
            )
            for p, content in self.tree.items()
            if p.parent == base
        ]

    def read_file(self, path):
        self.reads.append(Path(path).name)
        return self.tree[Path(path)]

    def is_directory(self, path):
        return self.tree.get(Path(path), b"") is None


def test_listing_and_reading_go_through_injected_fs(tmp_path: Path):
    """
    Verifica que o pacote é montado só com o FileSystem injetado.

    Invariantes:
        - a origem não precisa existir no disco local
        - o conteúdo dos membros vem de `read_file`
        - arquivos descartados pelo filtro nunca são lidos
    """
    _require_imports()
    fs = _MemoryFileSystem(
        {
            "/virtual/src": None,
            "/virtual/src/main.go": b"package main\n",
            "/virtual/src/notes.txt": b"skip\n",
            "/virtual/src/pkg": None,
            "/virtual/src/pkg/util.go": b"package pkg\n",
        }
    )
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz("/virtual/src", dest, fs=fs))

    assert set(_members(dest)) == {"main.go", "pkg", "pkg/util.go"}
    with tarfile.open(dest, "r:gz") as tar:
        assert tar.extractfile("pkg/util.go").read() == b"package pkg\n"
    assert sorted(fs.reads) == ["main.go", "util.go"]


def test_members_have_fixed_modes(tmp_path: Path, make_tree):
    _require_imports()
    src = make_tree(tmp_path / "src", {"pkg/util.go": b"y"})
    (src / "pkg" / "util.go").chmod(0o600)
    dest = tmp_path / "out.tar.gz"
    asyncio.run(generate_tar_gz(src, dest))
    members = _members(dest)
    assert members["pkg"].mode == 0o755
    assert members["pkg/util.go"].mode == 0o644
    assert members["pkg"].mtime == members["pkg/util.go"].mtime
