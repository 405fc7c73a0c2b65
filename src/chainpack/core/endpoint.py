# src/chainpack/core/endpoint.py
"""
Endpoint remoto grpc/grpcs.

Interpreta a URL de um peer e decide o modo de credencial, sem abrir
canal nem carregar bibliotecas de transporte:

    - grpc://host:port  → conexão insegura
    - grpcs://host:port → TLS, com o certificado PEM fornecido

Qualquer outro protocolo é rejeitado (InvalidProtocolError).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from .exceptions import InvalidProtocolError


@dataclass(frozen=True)
class Endpoint:
    addr: str
    secure: bool
    pem: Optional[bytes] = None

    @property
    def protocol(self) -> str:
        return "grpcs" if self.secure else "grpc"


def parse_endpoint(url: str, pem: Optional[str] = None) -> Endpoint:
    parts = urlsplit(url)
    protocol = parts.scheme.lower() or None

    if protocol == "grpc":
        return Endpoint(addr=parts.netloc, secure=False)

    if protocol == "grpcs":
        if not pem:
            raise InvalidProtocolError(
                message="grpcs:// endpoints require a PEM certificate",
                details={"url": url, "protocol": protocol},
                hint="Forneça o certificado PEM do peer para conexões TLS.",
            )
        return Endpoint(addr=parts.netloc, secure=True, pem=pem.encode("utf-8"))

    raise InvalidProtocolError(
        message=f"Invalid protocol: {protocol}.  URLs must begin with grpc:// or grpcs://",
        details={"url": url, "protocol": protocol},
    )
