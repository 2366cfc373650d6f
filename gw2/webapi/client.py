"""Top-level client."""

from __future__ import annotations

from typing import Any

from .core.connection import Connection
from .v2.client import Gw2WebApiV2Client


class Gw2Client:
    """Guild Wars 2 web API client.

    Wraps a :class:`Connection` and exposes the versioned endpoint trees.
    Either pass a ready connection or the keyword arguments to build one.

    Example::

        async with Gw2Client(access_token="...", cache=MemoryCacheMethod()) as client:
            account = await client.v2.account.get()
            bank = await client.v2.account.bank.get()
    """

    def __init__(self, connection: Connection | None = None, **connection_kwargs: Any) -> None:
        if connection is not None and connection_kwargs:
            raise TypeError("Pass either a connection or connection keyword arguments, not both")
        self._connection = connection if connection is not None else Connection(**connection_kwargs)
        self._v2: Gw2WebApiV2Client | None = None

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def v2(self) -> Gw2WebApiV2Client:
        if self._v2 is None:
            self._v2 = Gw2WebApiV2Client(self._connection)
        return self._v2

    async def close(self) -> None:
        """Close the connection's transport and cache."""
        await self._connection.close()

    async def __aenter__(self) -> Gw2Client:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
