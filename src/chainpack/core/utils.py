# src/chainpack/core/utils.py
"""Utilitários pequenos compartilhados pelo chainpack."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .fs import PathLike


@dataclass(frozen=True)
class Timestamp:
    """Instante UTC no formato de google.protobuf.Timestamp (seconds + nanos)."""

    seconds: int
    nanos: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"seconds": self.seconds, "nanos": self.nanos}


def generate_timestamp() -> Timestamp:
    """Timestamp do instante atual, com precisão de segundos (nanos = 0)."""
    return Timestamp(seconds=int(time.time()), nanos=0)


def path_exists(absolute_path: PathLike) -> bool:
    """True apenas para arquivo ou diretório existente; False em qualquer OSError."""
    try:
        p = Path(absolute_path)
        return p.is_dir() or p.is_file()
    except OSError:
        return False
