"""
chainpack — Canonical Exceptions (v1)

Este módulo define exceções tipadas internas do chainpack.

Objetivo:
- Permitir que hashers, archiver e packager levantem exceções semânticas tipadas
- Facilitar o mapeamento determinístico para ChainpackErrorPayload
- Evitar OSError/RuntimeError genéricos atravessando a fronteira pública

Regras:
- Exceções devem carregar apenas dados estruturados (serializáveis).
- Violações de contrato do chamador (ex.: `args` não iterável) NÃO são
  encapsuladas aqui: falham com o TypeError nativo onde forem observadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ChainpackException(Exception):
    """Base class para exceções internas do chainpack.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# I/O e pipeline de empacotamento
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PackagingIOError(ChainpackException):
    """Arquivo ilegível, diretório não listável ou destino não gravável.

    `details["path"]` sempre identifica o caminho que falhou.
    """


@dataclass(frozen=True)
class ArchivePipelineError(ChainpackException):
    """Falha em um estágio do pipeline de arquivamento (pack, compress, write)."""


# ---------------------------------------------------------------------------
# Providers / Endpoint / Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UnknownProviderError(ChainpackException):
    """Chave de provider não registrada no ProviderRegistry."""


@dataclass(frozen=True)
class DuplicateProviderError(ChainpackException):
    """Tentativa de registrar duas vezes a mesma chave de provider."""


@dataclass(frozen=True)
class InvalidProtocolError(ChainpackException):
    """URL de endpoint com protocolo diferente de grpc:// ou grpcs://."""


@dataclass(frozen=True)
class InvalidSettingsError(ChainpackException):
    """Valor de configuração fora do domínio aceito pelas settings."""
