"""IRC credential provisioning: HTTP client, cache and session state machine."""

from lounge.provisioning.models import Error, Loading, ProvisionedCredentials, Ready, SessionStatus
from lounge.provisioning.client import DEFAULT_RETRY, CredentialResolver, ProvisioningClient
from lounge.provisioning.session import FetchCredentials, ProvisioningSession

__all__ = [
    "DEFAULT_RETRY",
    "CredentialResolver",
    "Error",
    "FetchCredentials",
    "Loading",
    "ProvisionedCredentials",
    "ProvisioningClient",
    "ProvisioningSession",
    "Ready",
    "SessionStatus",
]
