"""Developer CLI: derive identities, hash passwords, provision and print a chat URL."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from loguru import logger

from lounge import __version__
from lounge.config import DEFAULTS, Config, cfg, load_config_with_env
from lounge.core.constants import CHAT_MODES, THEMES
from lounge.core.errors import LoungeConfigurationError
from lounge.embed.chat import ChatTarget
from lounge.embed.url import redact_lounge_url
from lounge.identity import CredentialStore, generate_identity
from lounge.identity.generator import password as generate_password
from lounge.provisioning import CredentialResolver, Error, ProvisioningClient, ProvisioningSession, Ready


def setup_logging(verbose: bool = False) -> None:
    """Configure loguru. Replace default logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=(
            "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> | {message}"
        ),
    )


def reload_config(config_path: Path) -> Config:
    """Load config from path and update global cfg."""
    data = load_config_with_env(config_path, defaults=DEFAULTS)
    cfg.reload(data)
    return cfg


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lounge",
        description="Embedded The Lounge chat: IRC identities and auto-login URLs",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to config file (default: config.yaml)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_identity = sub.add_parser("identity", help="Derive IRC username, nickname and password")
    p_identity.add_argument("name", help="Display name")
    p_identity.add_argument("--id", dest="unique_id", default=None, help="User id for the username suffix")

    sub.add_parser("password", help="Generate a random IRC password")

    p_hash = sub.add_parser("hash", help="bcrypt-hash a password")
    p_hash.add_argument("password")

    p_verify = sub.add_parser("verify", help="Check a password against a bcrypt hash")
    p_verify.add_argument("password")
    p_verify.add_argument("hash")

    p_url = sub.add_parser("url", help="Provision credentials and print the chat URL")
    p_url.add_argument("--channel", required=True, help="IRC channel name (without '#')")
    p_url.add_argument("--theme", choices=THEMES, default=None)
    p_url.add_argument("--mode", choices=CHAT_MODES, default=None)
    p_url.add_argument(
        "--show-password",
        action="store_true",
        help="Print the URL without masking the password",
    )
    return parser


async def _provision_url(args: argparse.Namespace, config: Config) -> str | None:
    """Run one provisioning session and build the URL; None on failure."""
    client = ProvisioningClient(
        config.api_base_url,
        token=config.api_token,
        timeout=config.provision_timeout_seconds,
    )
    resolver = CredentialResolver(client, ttl=config.credential_cache_ttl_seconds)
    session = ProvisioningSession()
    try:
        task = session.start(resolver)
        if task is not None:
            await task
        status = session.current_status()
    finally:
        session.close()

    if isinstance(status, Error):
        logger.error("Provisioning failed: {}", status.message)
        return None
    if not isinstance(status, Ready):
        return None

    target = ChatTarget(
        base_url=config.chat_base_url,
        channel_name=args.channel,
        theme=args.theme or config.theme,
        mode=args.mode or config.mode,
    )
    return target.url_for(status.credentials, nofocus=config.nofocus)


def run(args: argparse.Namespace, config: Config) -> int:
    """Execute a parsed command. Returns the process exit code."""
    if args.command == "identity":
        ident = generate_identity(args.name, args.unique_id)
        print(f"username: {ident.username}")
        print(f"nickname: {ident.nickname}")
        print(f"password: {ident.password}")
        return 0

    if args.command == "password":
        print(generate_password())
        return 0

    if args.command == "hash":
        print(CredentialStore().hash(args.password))
        return 0

    if args.command == "verify":
        ok = CredentialStore().verify(args.password, args.hash)
        print("match" if ok else "no match")
        return 0 if ok else 1

    if args.command == "url":
        if not config.api_base_url:
            logger.error("api_base_url not configured (set LOUNGE_API_BASE_URL)")
            return 1
        url = asyncio.run(_provision_url(args, config))
        if url is None:
            return 1
        print(url if args.show_password else redact_lounge_url(url))
        return 0

    return 2


def main() -> None:
    """Main entrypoint."""
    args = build_parser().parse_args()
    setup_logging(args.verbose)

    try:
        config = reload_config(args.config)
    except LoungeConfigurationError as exc:
        logger.error("Invalid config {}: {}", args.config, exc)
        sys.exit(1)

    sys.exit(run(args, config))


if __name__ == "__main__":
    main()
