"""Embed The Lounge web IRC client: identities, credentials, auto-login URLs, provisioning."""

from lounge.embed import build_lounge_url, chat_url_for, redact_lounge_url
from lounge.identity import CredentialStore, Identity, generate_identity
from lounge.provisioning import ProvisionedCredentials, ProvisioningClient, ProvisioningSession

__version__ = "0.1.0"

__all__ = [
    "CredentialStore",
    "Identity",
    "ProvisionedCredentials",
    "ProvisioningClient",
    "ProvisioningSession",
    "__version__",
    "build_lounge_url",
    "chat_url_for",
    "generate_identity",
    "redact_lounge_url",
]
