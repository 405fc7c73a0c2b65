# src/chainpack/core/config/hashing.py
"""
Identidade da configuração efetiva do chainpack.

O `config_hash` registrado nos metadados do `DeploymentPackage` permite
saber, a partir do pacote, com qual configuração ele foi produzido.

Forma canônica (v1):
    - JSON com chaves ordenadas e separadores compactos
    - caracteres não-ASCII preservados, codificados em UTF-8
    - digest SHA-256, fixo e independente da crypto suite selecionada,
      para que hashes de configuração sejam comparáveis entre suites
"""

import hashlib
import json
from typing import Any, Dict


def canonical_config_bytes(config: Dict[str, Any]) -> bytes:
    """
    Serializa a configuração na forma canônica usada para o hash.

    Raises:
        TypeError: configuração não é dict ou contém valor não serializável.
    """
    if not isinstance(config, dict):
        raise TypeError(f"Config para hashing deve ser dict, recebido: {type(config).__name__}")
    text = json.dumps(config, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return text.encode("utf-8")


def compute_config_hash(config: Dict[str, Any]) -> str:
    """SHA-256 hexadecimal de `canonical_config_bytes(config)`."""
    return hashlib.sha256(canonical_config_bytes(config)).hexdigest()
