"""Command line interface for Schnorr proofs and signatures over secp256k1."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Callable, Dict, Tuple

from .core import SchnorrParams, derive_public_key, generate_keypair, prove, sign, verify_bytes
from .errors import SchnorrError
from .transcript import proof_to_bytes, proof_to_dict

DEMO_MESSAGE = "I know the discrete log of this public key."


def _load_backend(name: str, bind_public_key: bool) -> Tuple[SchnorrParams, Callable[[], int]]:
    if name == "pyecc":
        from instantiations.secp256k1_pyecc import make_pyecc_secp256k1_params

        return make_pyecc_secp256k1_params(bind_public_key=bind_public_key)
    from instantiations.secp256k1 import make_secp256k1_params

    return make_secp256k1_params(bind_public_key=bind_public_key)


def _add_context_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--context", default="", help="UTF-8 context the proof is bound to")
    group.add_argument("--context-hex", help="Hex-encoded context the proof is bound to")


def _context_bytes(namespace: argparse.Namespace) -> bytes:
    if namespace.context_hex is not None:
        return bytes.fromhex(namespace.context_hex)
    return namespace.context.encode("utf-8")


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--backend",
        choices=["ecdsa", "pyecc"],
        default="ecdsa",
        help="Curve arithmetic backend (default: ecdsa)",
    )
    parser.add_argument(
        "--no-bind-public-key",
        dest="bind_public_key",
        action="store_false",
        help="Hash only (R, m) into the challenge instead of (R, X, m)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    keygen_parser = subparsers.add_parser("keygen", help="Generate or derive a key pair")
    keygen_parser.add_argument(
        "--secret",
        help="Hex-encoded secret key. If omitted a random one is generated.",
    )

    prove_parser = subparsers.add_parser("prove", help="Prove knowledge of a secret key")
    prove_parser.add_argument("secret", help="Hex-encoded secret key")
    _add_context_args(prove_parser)

    sign_parser = subparsers.add_parser("sign", help="Sign a UTF-8 message")
    sign_parser.add_argument("secret", help="Hex-encoded secret key")
    sign_parser.add_argument("message", help="Message to sign")

    verify_parser = subparsers.add_parser("verify", help="Verify a proof or signature")
    verify_parser.add_argument("public_key", help="Hex-encoded compressed public key")
    verify_parser.add_argument("proof", help="Hex-encoded proof R || s")
    _add_context_args(verify_parser)

    demo_parser = subparsers.add_parser("demo", help="Generate, prove and verify in one go")
    demo_parser.add_argument("--message", default=DEMO_MESSAGE)

    return parser.parse_args(argv)


def _proof_payload(params: SchnorrParams, public_key, proof, context: bytes) -> Dict[str, object]:
    return {
        "public_key": params.group.encode(public_key).hex(),
        "proof": proof_to_dict(params, proof),
        "proof_hex": proof_to_bytes(params, proof).hex(),
        "context_hex": context.hex(),
    }


def main(argv: list[str] | None = None) -> int:
    namespace = parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(level=namespace.log_level, format="%(levelname)s %(name)s: %(message)s")
    params, sample = _load_backend(namespace.backend, namespace.bind_public_key)

    try:
        if namespace.command == "keygen":
            if namespace.secret:
                secret_key = int(namespace.secret, 16)
                public_key = derive_public_key(params, secret_key)
            else:
                secret_key, public_key = generate_keypair(params, sample)
            payload = {
                "secret_key": params.field.to_bytes(secret_key).hex(),
                "public_key": params.group.encode(public_key).hex(),
            }
            print(json.dumps(payload, indent=2))
            return 0

        if namespace.command == "prove":
            context = _context_bytes(namespace)
            public_key, proof = prove(params, int(namespace.secret, 16), context, sample=sample)
            print(json.dumps(_proof_payload(params, public_key, proof, context), indent=2))
            return 0

        if namespace.command == "sign":
            message = namespace.message.encode("utf-8")
            public_key, signature = sign(params, int(namespace.secret, 16), message, sample=sample)
            print(json.dumps(_proof_payload(params, public_key, signature, message), indent=2))
            return 0

        if namespace.command == "verify":
            verified = verify_bytes(
                params,
                bytes.fromhex(namespace.public_key),
                bytes.fromhex(namespace.proof),
                _context_bytes(namespace),
            )
            print(json.dumps({"verified": verified}, indent=2))
            return 0 if verified else 1

        if namespace.command == "demo":
            message = namespace.message.encode("utf-8")
            secret_key, public_key = generate_keypair(params, sample)
            _, proof = prove(params, secret_key, message, sample=sample, public_key=public_key)
            payload = _proof_payload(params, public_key, proof, message)
            payload["message"] = namespace.message
            payload["verified"] = verify_bytes(
                params,
                params.group.encode(public_key),
                proof_to_bytes(params, proof),
                message,
            )
            print(json.dumps(payload, indent=2))
            return 0 if payload["verified"] else 1
    except (SchnorrError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    raise RuntimeError("Unreachable")
