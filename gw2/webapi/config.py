"""Shared web API constants.

This module centralizes URLs, limits and defaults used by the request
runtime and the endpoint clients so connection setup can stay small.
"""

from __future__ import annotations

from datetime import timedelta

# REST base URL (the version segment is appended by the request builder)
BASE_URL = "https://api.guildwars2.com"
API_VERSION = "v2"

# Schema version sent as ``v=`` when an endpoint does not pin its own
DEFAULT_SCHEMA_VERSION = "2019-02-21T00:00:00.000Z"

# Server-side limits
MAX_IDS_PER_REQUEST = 200
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

# Client defaults
DEFAULT_TIMEOUT = 30.0
DEFAULT_CACHE_DURATION = timedelta(minutes=5)
DEFAULT_MAX_CONCURRENCY = 4
USER_AGENT = "gw2-webapi/0.1.0"

# Environment variables read by Connection.from_env()
ENV_ACCESS_TOKEN = "GW2_ACCESS_TOKEN"
ENV_LOCALE = "GW2_LOCALE"
ENV_BASE_URL = "GW2_API_BASE_URL"
