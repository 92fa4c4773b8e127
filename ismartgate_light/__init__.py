"""iSmartGate light relay client."""
from __future__ import annotations

from .api import ISmartGateLightAPI, create_session, extract_webtoken
from .config import Credentials, validate_config
from .light import ISmartGateLight, async_setup_light

__all__ = [
    "Credentials",
    "ISmartGateLight",
    "ISmartGateLightAPI",
    "async_setup_light",
    "create_session",
    "extract_webtoken",
    "validate_config",
]
