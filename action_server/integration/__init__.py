"""
Integration layer: token validation, device providers and HomeGraph.
"""
from .auth import StaticTokenValidator, UserInfoTokenValidator
from .base import AccessTokenValidator, DeviceProvider
from .echo import EchoProvider
from .homegraph import HomeGraphClient

__all__ = [
    "AccessTokenValidator",
    "DeviceProvider",
    "EchoProvider",
    "HomeGraphClient",
    "StaticTokenValidator",
    "UserInfoTokenValidator",
]
