"""CLI entrypoint for chainpack fingerprinting and packaging."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.config import load_config, settings_from_config
from .core.config.errors import ConfigError
from .core.deploy import DeploymentPackager
from .core.endpoint import parse_endpoint
from .core.errors import exception_to_payload, packaging_io_error
from .core.exceptions import ChainpackException
from .core.hashing.directory import generate_directory_hash
from .core.hashing.parameters import InvocationDescriptor, hash_invocation
from .core.log import configure_logging, get_logger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="chainpack", description="Chaincode fingerprinting and packaging")
    parser.add_argument("--config", help="Path to defaults config (YAML or JSON)")
    parser.add_argument("--local-config", help="Optional local overrides (YAML or JSON)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_param = sub.add_parser("param-hash", help="Hash of deployment parameters")
    p_param.add_argument("path", help="Chaincode path")
    p_param.add_argument("func", help="Init function name")
    p_param.add_argument("args", nargs="*", help="Init arguments, in order")

    p_dir = sub.add_parser("dir-hash", help="Hash of chaincode directory seeded with a parameter hash")
    p_dir.add_argument("root", help="Project root directory")
    p_dir.add_argument("chaincode_dir", help="Chaincode directory relative to root")
    p_dir.add_argument("seed", help="Parameter hash used as seed")

    p_pkg = sub.add_parser("package", help="Fingerprint and .tar.gz for a deployment")
    p_pkg.add_argument("root", help="Project root directory (archived)")
    p_pkg.add_argument("chaincode_dir", help="Chaincode directory relative to root (hashed)")
    p_pkg.add_argument("dest", help="Destination .tar.gz path")
    p_pkg.add_argument("--code-path", help="Chaincode path for the parameter hash (defaults to ROOT/CHAINCODE_DIR)")
    p_pkg.add_argument("--func", required=True, help="Init function name")
    p_pkg.add_argument("--arg", action="append", default=[], dest="init_args", help="Init argument (repeatable)")
    p_pkg.add_argument("--peer", help="Target peer URL (grpc://host:port or grpcs://host:port), recorded in metadata")
    p_pkg.add_argument("--pem-file", help="PEM certificate of the peer (required for grpcs://)")

    return parser


def _resolve_config(args: argparse.Namespace) -> Dict[str, Any]:
    if args.config is None:
        return {}
    return load_config(defaults_path=args.config, local_path=args.local_config)


def _read_pem(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise packaging_io_error(path=path, operation="ler certificado PEM", reason=str(exc)) from exc


def _run(args: argparse.Namespace) -> Dict[str, Any]:
    settings = settings_from_config(_resolve_config(args))
    root_logger = configure_logging(settings.logging)
    packager = DeploymentPackager(settings, logger=root_logger)
    log = get_logger("cli", root_logger)

    if args.command == "param-hash":
        invocation = InvocationDescriptor.of(args.path, args.func, args.args)
        return {"parameter_hash": hash_invocation(invocation, suite=packager.suite)}

    if args.command == "dir-hash":
        fingerprint = generate_directory_hash(
            args.root,
            args.chaincode_dir,
            args.seed,
            suite=packager.suite,
            fs=packager.fs,
            order=settings.traversal_order,
            logger=get_logger("hashing", root_logger),
        )
        return {"directory_hash": fingerprint}

    peer = parse_endpoint(args.peer, pem=_read_pem(args.pem_file)) if args.peer else None
    code_path = args.code_path or f"{args.root.rstrip('/')}/{args.chaincode_dir}"
    invocation = InvocationDescriptor.of(code_path, args.func, args.init_args)
    log.debug("packaging %s into %s", code_path, args.dest)
    package = asyncio.run(
        packager.package(invocation, root_dir=args.root, chaincode_dir=args.chaincode_dir, dest_path=args.dest, peer=peer)
    )
    return package.to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        result = _run(args)
    except (ChainpackException, ConfigError, TypeError) as exc:
        print(json.dumps({"error": exception_to_payload(exc).to_dict()}, sort_keys=True), file=sys.stderr)
        return 1
    print(json.dumps(result, sort_keys=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
