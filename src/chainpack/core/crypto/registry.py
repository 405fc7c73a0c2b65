# src/chainpack/core/crypto/registry.py
"""
Registro explícito de providers do chainpack.

Este módulo define o `ProviderRegistry`, um mapa chave → fábrica
registrado em tempo de inicialização e consultado pela raiz de composição
(`DeploymentPackager`) a partir das settings.

Decisões arquiteturais:
    - Nenhum carregamento dinâmico de código (sem import por caminho vindo
      de variável de ambiente)
    - A seleção do provider é feita por chave declarada em configuração
    - Chaves duplicadas e chaves desconhecidas são erros fatais
    - A ordem de registro é preservada

Invariantes:
    - Cada chave registrada é única e não vazia
    - `create` sempre devolve uma nova instância da fábrica

Limites explícitos:
    - Não executa hashing
    - Não lê configuração nem variáveis de ambiente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Generic, List, TypeVar

from ..exceptions import DuplicateProviderError, UnknownProviderError
from .suite import CryptoSuite, CryptographySuite, HashlibSuite


T = TypeVar("T")


@dataclass
class ProviderRegistry(Generic[T]):
    """
    Registro canônico de fábricas de providers.

    O registro substitui a seleção de implementações por variável de ambiente:
    a raiz de composição recebe a chave via settings e chama `create(key)`.
    """

    kind: str = "provider"
    _factories: Dict[str, Callable[[], T]] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, key: str, factory: Callable[[], T]) -> None:
        if not isinstance(key, str) or not key.strip():
            raise ValueError(f"{self.kind} key must be a non-empty string")

        if key in self._factories:
            raise DuplicateProviderError(
                message=f"Duplicate {self.kind} key: {key}",
                details={"kind": self.kind, "key": key},
            )

        self._factories[key] = factory
        self._order.append(key)

    def create(self, key: str) -> T:
        if key not in self._factories:
            raise UnknownProviderError(
                message=f"Unknown {self.kind}: {key}",
                details={"kind": self.kind, "key": key, "available": self.keys()},
                hint="Registre o provider antes de selecioná-lo ou corrija a chave na configuração.",
            )
        return self._factories[key]()

    def keys(self) -> List[str]:
        return list(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._factories


def default_registry() -> ProviderRegistry[CryptoSuite]:
    """Registry de crypto suites com os providers embutidos."""
    registry: ProviderRegistry[CryptoSuite] = ProviderRegistry(kind="crypto suite")
    registry.register("sha3_256", lambda: HashlibSuite("sha3_256"))
    registry.register("sha256", lambda: HashlibSuite("sha256"))
    registry.register("sha3_384", lambda: HashlibSuite("sha3_384"))
    registry.register("cryptography.sha3_256", lambda: CryptographySuite("sha3_256"))
    registry.register("cryptography.sha256", lambda: CryptographySuite("sha256"))
    return registry
