"""Request construction and cache fingerprinting.

:func:`build_request` turns an endpoint descriptor plus call arguments into
a :class:`PreparedRequest`: absolute URL, headers and the fingerprint used
as cache and de-duplication key.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import quote, urlencode

from ..config import API_VERSION
from .exceptions import AuthenticationRequiredError, InvalidArgumentError

if TYPE_CHECKING:
    from .connection import Connection
    from .endpoint import EndpointDescriptor


@dataclass(frozen=True)
class PreparedRequest:
    """Fully built request, ready for the transport."""

    method: str
    url: str
    headers: Mapping[str, str]
    fingerprint: str
    endpoint: EndpointDescriptor = field(repr=False)
    query: Mapping[str, str] = field(default_factory=dict)

    @property
    def endpoint_name(self) -> str:
        return self.endpoint.name


def format_ids(ids: Iterable[Any] | str) -> str:
    """Join ids for the ``ids`` query parameter (``all`` passes through).

    Raises:
        InvalidArgumentError: If no ids are given
    """
    if isinstance(ids, str):
        if not ids:
            raise InvalidArgumentError("ids must not be empty")
        return ids
    joined = ",".join(str(i) for i in ids)
    if not joined:
        raise InvalidArgumentError("ids must not be empty")
    return joined


def compute_fingerprint(
    *,
    path: str,
    query: Mapping[str, str],
    schema_version: str,
    locale: str | None,
    auth_scope: str | None,
) -> str:
    """Deterministic cache key for a request identity."""
    payload = {
        "path": path,
        "query": sorted(query.items()),
        "v": schema_version,
        "lang": locale,
        "auth": auth_scope,
    }
    raw = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(raw.encode()).hexdigest()


def build_request(
    connection: Connection,
    endpoint: EndpointDescriptor,
    *,
    path_params: Mapping[str, Any] | None = None,
    item_id: Any = None,
    query: Mapping[str, Any] | None = None,
) -> PreparedRequest:
    """Build the GET request for one endpoint call.

    Args:
        connection: Connection supplying base URL, locale and token
        endpoint: Endpoint descriptor
        path_params: Values for ``:placeholder`` segments
        item_id: Appended as a trailing path segment (get-by-id)
        query: Endpoint parameters (``ids``, ``page``, ``page_size``)

    Raises:
        AuthenticationRequiredError: Endpoint needs a token and there is none
        InvalidArgumentError: A path placeholder is missing
    """
    if endpoint.authenticated and not connection.authenticated:
        raise AuthenticationRequiredError(
            f"Endpoint '{endpoint.name}' requires an access token", endpoint=endpoint.name
        )

    path = endpoint.build_path(path_params)
    if item_id is not None:
        if str(item_id) == "":
            raise InvalidArgumentError("id must not be empty")
        path = f"{path}/{quote(str(item_id), safe='')}"

    endpoint_query = {k: str(v) for k, v in (query or {}).items() if v is not None}
    locale = connection.locale.value if endpoint.localized else None
    auth_scope = connection.auth_scope if endpoint.authenticated else None

    params = dict(endpoint_query)
    params["v"] = endpoint.schema_version
    if locale is not None:
        params["lang"] = locale
    url = f"{connection.base_url}/{API_VERSION}/{path}?{urlencode(params, safe=',:')}"

    headers = {
        "Accept": "application/json",
        "User-Agent": connection.user_agent,
    }
    if endpoint.authenticated:
        headers["Authorization"] = f"Bearer {connection.access_token}"

    fingerprint = compute_fingerprint(
        path=path,
        query=endpoint_query,
        schema_version=endpoint.schema_version,
        locale=locale,
        auth_scope=auth_scope,
    )
    return PreparedRequest(
        method="GET",
        url=url,
        headers=headers,
        fingerprint=fingerprint,
        endpoint=endpoint,
        query=endpoint_query,
    )
