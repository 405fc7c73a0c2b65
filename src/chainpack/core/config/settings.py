# src/chainpack/core/config/settings.py
"""
Settings tipadas do chainpack.

Converte a configuração resolvida (dict) na estrutura explícita consumida
pela raiz de composição (`DeploymentPackager`). É aqui que a seleção de
providers deixa de depender de variáveis de ambiente: a chave da crypto
suite é apenas um valor de configuração.

Estrutura reconhecida:

    crypto:
      suite: sha3_256          # chave do ProviderRegistry
    hashing:
      traversal_order: sorted  # sorted | listing
    logging:
      info: console            # nível → console | caminho de arquivo
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..exceptions import InvalidSettingsError
from ..fs import TraversalOrder
from .hashing import compute_config_hash
from .merge import deep_merge


DEFAULT_CONFIG: Dict[str, Any] = {
    "crypto": {"suite": "sha3_256"},
    "hashing": {"traversal_order": TraversalOrder.SORTED.value},
    "logging": {"info": "console"},
}


# seções substituídas inteiras (sem merge por chave)
REPLACED_SECTIONS = ("logging",)


@dataclass(frozen=True)
class ChainpackSettings:
    """Configuração efetiva e validada da raiz de composição."""

    crypto_suite: str = "sha3_256"
    traversal_order: TraversalOrder = TraversalOrder.SORTED
    logging: Dict[str, str] = field(default_factory=lambda: {"info": "console"})
    config_hash: Optional[str] = None


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = config.get(name) or {}
    if not isinstance(value, dict):
        raise InvalidSettingsError(
            message=f"Seção '{name}' deve ser um mapa",
            details={"section": name, "received": type(value).__name__},
        )
    return value


def settings_from_config(config: Optional[Dict[str, Any]] = None) -> ChainpackSettings:
    """
    Valida a configuração e produz `ChainpackSettings`.

    A configuração recebida é mesclada sobre `DEFAULT_CONFIG` antes da
    validação; o hash registrado é o da configuração efetiva. A seção
    `logging`, quando presente, substitui a dos defaults inteira: declarar
    `{error: error.log}` desliga o console.

    Raises:
        InvalidSettingsError: valor fora do domínio aceito.
        ConfigTypeConflictError: conflito estrutural com os defaults.
    """
    effective = deep_merge(DEFAULT_CONFIG, config or {}, replace=REPLACED_SECTIONS)

    suite = _section(effective, "crypto").get("suite")
    if not isinstance(suite, str) or not suite.strip():
        raise InvalidSettingsError(
            message="crypto.suite deve ser uma string não vazia",
            details={"key": "crypto.suite", "value": suite},
        )

    raw_order = _section(effective, "hashing").get("traversal_order")
    try:
        order = TraversalOrder(raw_order)
    except ValueError:
        raise InvalidSettingsError(
            message=f"hashing.traversal_order inválido: {raw_order!r}",
            details={
                "key": "hashing.traversal_order",
                "value": raw_order,
                "allowed": [o.value for o in TraversalOrder],
            },
        ) from None

    levels = _section(effective, "logging")
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in levels.items()):
        raise InvalidSettingsError(
            message="logging deve mapear nível → 'console' ou caminho de arquivo",
            details={"key": "logging"},
        )

    return ChainpackSettings(
        crypto_suite=suite.strip(),
        traversal_order=order,
        logging=dict(levels),
        config_hash=compute_config_hash(effective),
    )
