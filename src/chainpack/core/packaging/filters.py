# src/chainpack/core/packaging/filters.py
"""
Política de filtragem do pacote de deploy (FilterDecision).

Regras, avaliadas por entrada durante a travessia:
    1. Diretórios são sempre incluídos (para permitir a descida)
    2. Arquivos cujo nome contém "Dockerfile" são sempre incluídos
    3. Demais arquivos são incluídos apenas se a extensão estiver em
       KEEP_EXTENSIONS

A decisão usa apenas `kind`, `name` e extensão da entrada, nunca o
conteúdo. As constantes são fixas (não configuráveis).
"""

from __future__ import annotations

import os

from ..fs import DirectoryEntry


# Extensões mantidas no .tar.gz; todo o resto é excluído para reduzir
# o payload da transação de deploy.
KEEP_EXTENSIONS = frozenset({".go", ".yaml", ".json", ".c", ".h"})

DOCKERFILE_MARKER = "Dockerfile"


def should_include(entry: DirectoryEntry) -> bool:
    if entry.is_directory:
        return True

    if DOCKERFILE_MARKER in entry.name:
        return True

    _, ext = os.path.splitext(entry.name)
    return ext in KEEP_EXTENSIONS
