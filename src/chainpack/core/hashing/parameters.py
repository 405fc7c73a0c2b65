# src/chainpack/core/hashing/parameters.py
"""
Hash dos parâmetros de deploy (ParameterHasher).

Gera o digest que identifica a *invocação* de um deploy: o caminho do
chaincode, o nome da função de inicialização e todos os argumentos, na
ordem em que foram fornecidos.

Política de hashing (v1):
    - args concatenados na ordem recebida (sem ordenação, sem deduplicação)
    - entrada = path + func + args_concatenados, codificada em UTF-8
    - digest pela crypto suite injetada (padrão: SHA3-256)
    - nenhuma normalização de espaços ou encoding

Limites explícitos:
    - Não valida os tipos de entrada: `args` não iterável ou elementos que
      não sejam str falham com TypeError no ponto de iteração
    - Não realiza I/O
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..crypto.suite import CryptoSuite, default_suite


@dataclass(frozen=True)
class InvocationDescriptor:
    """Uma chamada de deploy: código alvo, função de entrada e argumentos."""

    code_path: str
    entry_point: str
    arguments: Tuple[str, ...] = ()

    @classmethod
    def of(cls, code_path: str, entry_point: str, arguments: Iterable[str] = ()) -> "InvocationDescriptor":
        return cls(code_path=code_path, entry_point=entry_point, arguments=tuple(arguments))


def parameter_hash_input(path: str, func: str, args: Iterable[str]) -> bytes:
    """Bytes exatos submetidos ao digest para (path, func, args)."""
    arg_str = "".join(args)
    return (path + func + arg_str).encode("utf-8")


def generate_parameter_hash(
    path: str,
    func: str,
    args: Iterable[str],
    *,
    suite: Optional[CryptoSuite] = None,
) -> str:
    """
    Gera o hash hexadecimal dos parâmetros de deploy.

    Args:
        path: caminho do chaincode (ex.: relativo a $GOPATH/src).
        func: nome da função de inicialização.
        args: argumentos de inicialização, em ordem significativa.
        suite: crypto suite; SHA3-256 quando omitida.

    Returns:
        str: digest hexadecimal.

    Raises:
        TypeError: `args` não iterável ou com elementos não-str.
    """
    suite = suite or default_suite()
    return suite.hexdigest(parameter_hash_input(path, func, args))


def hash_invocation(invocation: InvocationDescriptor, *, suite: Optional[CryptoSuite] = None) -> str:
    return generate_parameter_hash(
        invocation.code_path,
        invocation.entry_point,
        invocation.arguments,
        suite=suite,
    )
