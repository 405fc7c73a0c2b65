# src/chainpack/core/__init__.py
"""
Core do chainpack.

Componentes principais:
    - hashing   → digest da invocação e digest encadeado do diretório
    - packaging → filtro e pipeline pack → gzip → destino
    - crypto    → crypto suites e registry explícito de providers
    - config    → carregamento, merge, hashing e settings tipadas
    - deploy    → raiz de composição (DeploymentPackager)
    - endpoint  → interpretação de URLs grpc:// e grpcs:// do peer

Princípios fundamentais:
    - Nenhuma decisão silenciosa: falhas de I/O abortam a operação inteira
    - Nenhum estado global: logger, suite e file system são injetados
    - Nenhum carregamento dinâmico de código

Limites explícitos:
    - Não implementa primitivas criptográficas
    - Não implementa transporte de rede nem persistência
"""

from .deploy import DeploymentPackage, DeploymentPackager
from .endpoint import Endpoint, parse_endpoint
from .utils import Timestamp, generate_timestamp, path_exists

__all__ = [
    "DeploymentPackage",
    "DeploymentPackager",
    "Endpoint",
    "Timestamp",
    "generate_timestamp",
    "parse_endpoint",
    "path_exists",
]
