"""
chainpack — Canonical Error Structures (v1)

Este módulo define o padrão canônico de erros serializáveis do chainpack.
Erros são considerados artefatos de domínio e fazem parte do contrato
operacional do sistema, devendo ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhuma decisão implícita é permitida: nenhum erro é reprocessado,
nenhuma operação é repetida e nenhum resultado parcial é devolvido.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .config.errors import ConfigError
from .exceptions import (
    ArchivePipelineError,
    ChainpackException,
    PackagingIOError,
)


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChainpackErrorPayload:
    """
    Payload canônico de erro do chainpack.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico (ex.: path, stage)
    - hint: ação sugerida ao operador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any]
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# I/O
PACKAGING_IO_ERROR = "PACKAGING_IO_ERROR"

# Pipeline de arquivamento
ARCHIVE_PIPELINE_ERROR = "ARCHIVE_PIPELINE_ERROR"

# Violação de contrato do chamador
INPUT_ERROR = "INPUT_ERROR"

# Configuração
CONFIG_ERROR = "CONFIG_ERROR"

# Fallback
UNEXPECTED_ERROR = "UNEXPECTED_ERROR"


_TYPE_BY_EXCEPTION = {
    PackagingIOError: PACKAGING_IO_ERROR,
    ArchivePipelineError: ARCHIVE_PIPELINE_ERROR,
}


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def packaging_io_error(
    *,
    path: str,
    operation: str,
    reason: Optional[str] = None,
    hint: str = "Verifique se o caminho existe e se as permissões de leitura/escrita estão corretas.",
) -> PackagingIOError:
    return PackagingIOError(
        message=f"Falha de I/O ao {operation}: {path}",
        details={
            "path": path,
            "operation": operation,
            "reason": reason,
        },
        hint=hint,
    )


def archive_pipeline_error(
    *,
    stage: str,
    dest_path: str,
    reason: Optional[str] = None,
    hint: str = "O arquivo de destino parcial foi removido. Corrija a causa e gere o pacote novamente.",
) -> ArchivePipelineError:
    return ArchivePipelineError(
        message=f"Falha no estágio '{stage}' do pipeline de arquivamento",
        details={
            "stage": stage,
            "dest_path": dest_path,
            "reason": reason,
        },
        hint=hint,
    )


def exception_to_payload(exc: BaseException) -> ChainpackErrorPayload:
    """Converte exceções em ChainpackErrorPayload (serializável, acionável).

    Regras:
    - ChainpackException: usa o catálogo quando mapeado; caso contrário o nome
      da classe vira o código estável.
    - TypeError: violação de contrato do chamador (INPUT_ERROR).
    - Outras exceções: UNEXPECTED_ERROR, sem expor stack trace.
    """
    if isinstance(exc, ChainpackException):
        return ChainpackErrorPayload(
            type=_TYPE_BY_EXCEPTION.get(type(exc), exc.__class__.__name__),
            message=exc.message,
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    if isinstance(exc, ConfigError):
        return ChainpackErrorPayload(
            type=CONFIG_ERROR,
            message=str(exc) or "Configuração inválida",
            details={"exception_class": exc.__class__.__name__},
            hint="Revise os arquivos de configuração informados.",
        )

    if isinstance(exc, TypeError):
        return ChainpackErrorPayload(
            type=INPUT_ERROR,
            message=str(exc) or "Parâmetros de invocação inválidos",
            details={"exception_class": exc.__class__.__name__},
            hint="Forneça path/func como str e args como sequência de str.",
        )

    return ChainpackErrorPayload(
        type=UNEXPECTED_ERROR,
        message=str(exc) or "Erro inesperado",
        details={"exception_class": exc.__class__.__name__},
        hint="Verifique o log técnico para diagnosticar a falha.",
    )
