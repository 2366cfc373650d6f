"""Guild Wars 2 web API v2 endpoints."""

from .client import (
    AccountClient,
    CharactersClient,
    CharactersIdClient,
    ContinentsClient,
    ContinentsIdClient,
    Gw2WebApiV2Client,
)
from .endpoints import ENDPOINTS, register_all

__all__ = [
    "AccountClient",
    "CharactersClient",
    "CharactersIdClient",
    "ContinentsClient",
    "ContinentsIdClient",
    "ENDPOINTS",
    "Gw2WebApiV2Client",
    "register_all",
]
