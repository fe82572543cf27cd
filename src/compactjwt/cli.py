"""Command-line interface for encoding and decoding tokens."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click
from cryptography.exceptions import UnsupportedAlgorithm
from safir.click import display_help

from .algorithms import Algorithm, AlgorithmName
from .claims import Claims
from .codec import TokenCodec
from .config import Config
from .exceptions import JWTError
from .keypair import RSAKeyPair
from .logging import setup_logging

__all__ = [
    "decode",
    "encode",
    "generate_key",
    "header",
    "help",
    "main",
]

_ALGORITHM_CHOICE = click.Choice(
    [n.value for n in AlgorithmName], case_sensitive=False
)


def _load_algorithm(name: str, key_file: Path) -> Algorithm:
    """Build an algorithm from a name and a key file.

    HMAC keys are used exactly as stored in the file.  RSA keys must be
    PEM-encoded and may be either private or public keys.
    """
    try:
        return Algorithm.from_name(name, key_file.read_bytes())
    except (TypeError, UnsupportedAlgorithm, ValueError) as e:
        raise click.UsageError(f"Cannot load {name} key: {e!s}") from e


def _parse_claim(pair: str) -> tuple[str, str]:
    if "=" not in pair:
        msg = f"{pair} is not KEY=VALUE"
        raise click.BadParameter(msg, param_hint="claim")
    key, value = pair.split("=", 1)
    return key, value


def _print_json(data: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(data, indent=2, sort_keys=True) + "\n")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Encode, decode, and inspect JSON Web Tokens."""
    config = Config()
    setup_logging(config)
    ctx.obj = config


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.argument("claims_json", default=None, required=False)
@click.option(
    "--algorithm",
    "-a",
    type=_ALGORITHM_CHOICE,
    default=None,
    help="Signing algorithm. If omitted, the token is not signed.",
)
@click.option(
    "--key-file",
    "-k",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File containing the signing key.",
)
@click.option(
    "--claim",
    "-c",
    "claim_pairs",
    multiple=True,
    metavar="KEY=VALUE",
    help="String claim to add to the token.",
)
@click.option(
    "--expires-in",
    type=int,
    default=None,
    help="Set iat to now and exp to this many seconds later.",
)
@click.pass_obj
def encode(
    config: Config,
    claims_json: str | None,
    algorithm: str | None,
    key_file: Path | None,
    claim_pairs: tuple[str, ...],
    expires_in: int | None,
) -> None:
    """Encode a new token.

    The claims are taken from the optional JSON object argument, overridden
    by any ``--claim`` options.
    """
    claims = Claims()
    if claims_json:
        try:
            data = json.loads(claims_json)
        except ValueError as e:
            msg = f"Invalid claims: {e!s}"
            raise click.BadParameter(msg, param_hint="CLAIMS_JSON") from e
        if not isinstance(data, dict):
            msg = "Claims must be a JSON object"
            raise click.BadParameter(msg, param_hint="CLAIMS_JSON")
        claims.update(data)
    claims.update(_parse_claim(p) for p in claim_pairs)
    if expires_in is not None:
        claims.expire_after(expires_in)

    signer = None
    if algorithm:
        if not key_file:
            raise click.UsageError("--key-file is required with --algorithm")
        signer = _load_algorithm(algorithm, key_file)
    try:
        token = TokenCodec(config).encode(claims, signer)
    except JWTError as e:
        raise click.ClickException(str(e)) from e
    sys.stdout.write(token + "\n")


@main.command()
@click.argument("token")
@click.option(
    "--algorithm",
    "-a",
    "algorithm_names",
    type=_ALGORITHM_CHOICE,
    multiple=True,
    help="Acceptable algorithm. May be given multiple times.",
)
@click.option(
    "--key-file",
    "-k",
    "key_files",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    multiple=True,
    help="Key for the corresponding --algorithm option.",
)
@click.option(
    "--require-expiration/--no-require-expiration",
    default=None,
    help="Whether the token must have an exp claim.",
)
@click.option(
    "--allow-unsecured",
    default=False,
    is_flag=True,
    help="Accept unsigned tokens when no algorithm is given.",
)
@click.pass_obj
def decode(
    config: Config,
    token: str,
    algorithm_names: tuple[str, ...],
    key_files: tuple[Path, ...],
    require_expiration: bool | None,
    allow_unsecured: bool,
) -> None:
    """Verify a token and print its claims.

    If no algorithms are given, the signature is not checked.
    """
    if len(algorithm_names) != len(key_files):
        msg = "Each --algorithm option needs a matching --key-file option"
        raise click.UsageError(msg)
    algorithms = [
        _load_algorithm(n, f)
        for n, f in zip(algorithm_names, key_files, strict=True)
    ]
    update: dict[str, bool] = {}
    if require_expiration is not None:
        update["require_expiration"] = require_expiration
    if allow_unsecured:
        update["allow_unsecured"] = True
    codec = TokenCodec(config.model_copy(update=update))
    try:
        claims = codec.decode(token, algorithms)
    except JWTError as e:
        raise click.ClickException(str(e)) from e
    _print_json(claims)


@main.command()
def generate_key() -> None:
    """Generate a new RSA key pair.

    The output will be the private key of the newly-generated key pair, from
    which the public key can be recovered.
    """
    keypair = RSAKeyPair.generate()
    sys.stdout.write(keypair.private_key_as_pem().decode())


@main.command()
@click.argument("token")
@click.pass_obj
def header(config: Config, token: str) -> None:
    """Print the header of a token without verifying it."""
    try:
        data = TokenCodec(config).get_unverified_header(token)
    except JWTError as e:
        raise click.ClickException(str(e)) from e
    _print_json(data)
