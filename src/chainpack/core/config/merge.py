# src/chainpack/core/config/merge.py
"""
Deep-merge de configuração do chainpack.

Política de merge (v1):
    - mapa sobre mapa → merge recursivo por chave
    - lista → substitui a lista anterior inteira
    - escalar → substitui o valor anterior
    - seções listadas em `replace` → substituídas inteiras, sem merge
    - tipos diferentes na mesma chave → ConfigTypeConflictError

As seções substituídas inteiras existem para mapas cujo conjunto de chaves
é o próprio valor configurado (ex.: `logging`, onde cada chave é um
destino de log): mesclar manteria destinos que o usuário não declarou.

Invariantes:
    - Nenhum input é mutado; o resultado não compartilha objetos com eles
    - Mensagens de conflito identificam a chave pelo caminho completo
      (ex.: `hashing.traversal_order`)
"""

from copy import deepcopy
from typing import Any, Collection, Dict

from .errors import ConfigTypeConflictError


def _merge_at(
    prefix: str,
    base: Dict[str, Any],
    override: Dict[str, Any],
    replace: Collection[str],
) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}

    for key, incoming in override.items():
        path = f"{prefix}{key}"
        current = merged.get(key)

        if key not in merged or path in replace or isinstance(incoming, list):
            merged[key] = deepcopy(incoming)
        elif isinstance(current, dict) and isinstance(incoming, dict):
            merged[key] = _merge_at(f"{path}.", current, incoming, replace)
        elif type(current) is type(incoming):
            merged[key] = deepcopy(incoming)
        else:
            raise ConfigTypeConflictError(
                f"Conflito de tipo em '{path}': "
                f"{type(current).__name__} vs {type(incoming).__name__}"
            )

    return merged


def deep_merge(
    base: Dict[str, Any],
    override: Dict[str, Any],
    *,
    replace: Collection[str] = (),
) -> Dict[str, Any]:
    """
    Aplica `override` sobre `base` e devolve um novo dicionário.

    Args:
        base: configuração base (ex.: defaults).
        override: overrides explícitos.
        replace: caminhos pontuados (ex.: `"logging"`) cujo valor no override
            substitui o da base sem merge.

    Raises:
        ConfigTypeConflictError: raiz não-dict ou tipos incompatíveis na mesma chave.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_at("", base, override, frozenset(replace))
