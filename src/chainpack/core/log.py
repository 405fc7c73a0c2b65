# src/chainpack/core/log.py
"""
Logging do chainpack.

Este módulo configura o logger raiz do pacote (`chainpack`) e fornece
handles nomeados que são passados explicitamente aos componentes
(hashers, archiver, packager). Não há singleton global mutável nem
substituição de métodos em runtime: o prefixo `[nome]: ` é fixado na
construção do adapter.

Formato de configuração (mapa nível → destino):

    {
        "error": "error.log",          # arquivo relativo ao cwd
        "debug": "/tmp/app/debug.log", # ou caminho absoluto
        "info": "console",             # 'console' → stderr
    }

Níveis reconhecidos: debug, info, warn, error. Chaves desconhecidas são
ignoradas. Um mapa vazio instala um único handler de console em INFO.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, MutableMapping, Optional, Tuple

from .errors import packaging_io_error


ROOT_LOGGER_NAME = "chainpack"

LOGGING_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

CONSOLE = "console"

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ChainpackLoggerAdapter(logging.LoggerAdapter):
    """Adapter que prefixa cada mensagem com `[nome]: `."""

    def __init__(self, logger: logging.Logger, name: str):
        super().__init__(logger, {"component": name})
        self.component = name

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        return f"[{self.component}]: {msg}", kwargs


def _handler_for(level_name: str, target: str) -> logging.Handler:
    if target == CONSOLE:
        handler: logging.Handler = logging.StreamHandler()
    else:
        handler = logging.FileHandler(target, encoding="utf-8")
    handler.setLevel(LOGGING_LEVELS[level_name])
    handler.setFormatter(logging.Formatter(_FORMAT))
    return handler


def configure_logging(levels: Optional[Mapping[str, str]] = None) -> logging.Logger:
    """
    Configura o logger raiz do chainpack a partir de um mapa nível → destino.

    Handlers previamente instalados por esta função são removidos e
    fechados, de modo que chamadas repetidas não duplicam saída. Os novos
    handlers são criados antes da troca: se um arquivo de log não puder ser
    aberto, a configuração anterior permanece intacta.

    Raises:
        PackagingIOError: arquivo de log não pôde ser aberto.

    Returns:
        logging.Logger: o logger `chainpack` configurado.
    """
    levels = dict(levels or {})
    handlers: List[logging.Handler] = []
    for level, target in levels.items():
        if level not in LOGGING_LEVELS:
            continue
        try:
            handlers.append(_handler_for(level, str(target)))
        except OSError as exc:
            for created in handlers:
                created.close()
            raise packaging_io_error(
                path=str(target),
                operation="abrir arquivo de log",
                reason=str(exc),
                hint="Verifique se o diretório do arquivo de log existe e é gravável.",
            ) from exc
    if not handlers:
        handlers = [_handler_for("info", CONSOLE)]

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    for handler in handlers:
        root.addHandler(handler)

    root.setLevel(min(h.level for h in handlers))
    root.propagate = False

    root.debug("logging configured with %s", levels or {"info": CONSOLE})
    return root


def get_logger(name: str, base: Optional[logging.Logger] = None) -> ChainpackLoggerAdapter:
    """Retorna um handle de logger nomeado (filho de `chainpack`)."""
    if base is None:
        base = logging.getLogger(ROOT_LOGGER_NAME)
    return ChainpackLoggerAdapter(base.getChild(name), name)
