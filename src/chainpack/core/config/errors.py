# src/chainpack/core/config/errors.py
"""
Exceções canônicas da camada de configuração do chainpack.

As exceções aqui definidas representam violações estruturais explícitas
da configuração, e não erros de hashing ou de empacotamento.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção aqui representa falha de I/O do core

Limites explícitos:
    - Não realiza fallback ou recovery
"""


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do chainpack.

    Permite captura genérica de erros de configuração, distinta das
    falhas de hashing/arquivamento (`ChainpackException`).
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração não encontrado no caminho especificado.

    O arquivo de defaults é obrigatório; o loader não tenta inferir nem
    criar defaults automaticamente.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"hashing": {"traversal_order": "sorted"}}
        - override: {"hashing": "listing"}

    Nenhum merge parcial é produzido em caso de conflito.
    """


class InvalidConfigSyntaxError(ConfigError):
    """
    Arquivo de configuração com sintaxe inválida (YAML ou JSON malformado).

    A exceção original do parser é preservada em `__cause__`.
    """
