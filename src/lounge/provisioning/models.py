"""Provisioned credentials and the session status union."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal, Union

from lounge.core.errors import ProvisioningError

_REQUIRED_FIELDS = ("ircUsername", "ircPassword", "networkName")


@dataclass(frozen=True)
class ProvisionedCredentials:
    """Live IRC login returned by the provisioning endpoint."""

    success: bool
    irc_username: str
    irc_password: str = field(repr=False)
    network_name: str

    @classmethod
    def from_dict(cls, data: Any) -> ProvisionedCredentials:
        """Parse the endpoint's JSON body (camelCase keys).

        Raises ProvisioningError when the payload is not an object or a field
        is missing or not a string.
        """
        if not isinstance(data, dict):
            raise ProvisioningError("Invalid response format", code="malformed_response")
        missing = [k for k in _REQUIRED_FIELDS if not isinstance(data.get(k), str)]
        if missing:
            raise ProvisioningError(
                "Invalid response format",
                code="malformed_response",
                details={"missing": missing},
            )
        return cls(
            success=bool(data.get("success", False)),
            irc_username=data["ircUsername"],
            irc_password=data["ircPassword"],
            network_name=data["networkName"],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "ircUsername": self.irc_username,
            "ircPassword": self.irc_password,
            "networkName": self.network_name,
        }


@dataclass(frozen=True)
class Loading:
    """Fetch in flight (or not yet started)."""

    kind: ClassVar[Literal["loading"]] = "loading"


@dataclass(frozen=True)
class Ready:
    """Credentials available; the iframe can be rendered."""

    credentials: ProvisionedCredentials
    kind: ClassVar[Literal["ready"]] = "ready"


@dataclass(frozen=True)
class Error:
    """Attempt failed; the UI should offer a retry."""

    message: str
    kind: ClassVar[Literal["error"]] = "error"


SessionStatus = Union[Loading, Ready, Error]
