# src/chainpack/core/config/__init__.py

"""
Camada de configuração do chainpack.

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Validação e conversão para `ChainpackSettings`
    - Geração de hash canônico para rastreabilidade

Limites explícitos:
    - Não consulta variáveis de ambiente
    - Não executa hashing de diretórios nem empacotamento
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidConfigSyntaxError,
    UnsupportedConfigFormatError,
)
from .hashing import canonical_config_bytes, compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, ChainpackSettings, settings_from_config

__all__ = [
    "ChainpackSettings",
    "ConfigError",
    "ConfigTypeConflictError",
    "DEFAULT_CONFIG",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidConfigSyntaxError",
    "UnsupportedConfigFormatError",
    "canonical_config_bytes",
    "compute_config_hash",
    "deep_merge",
    "load_config",
    "settings_from_config",
]
