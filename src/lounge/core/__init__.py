"""Core errors and constants."""

from lounge.core.errors import LoungeConfigurationError, LoungeError, ProvisioningError

__all__ = ["LoungeConfigurationError", "LoungeError", "ProvisioningError"]
