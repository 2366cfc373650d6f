"""Endpoint client base types.

Every endpoint client is a composition of capability mixins, one per
access pattern the live API offers for its path, plus a static
:class:`~gw2.webapi.core.endpoint.EndpointDescriptor`:

=====================  =====================================================
Mixin                  Methods
=====================  =====================================================
SingleCapability       ``get()``, ``get_response()``
BlobCapability         ``get()``, ``get_response()``
ByIdCapability         ``get(id)``, ``get_response(id)``
ByIdsCapability        ``ids()``, ``many(ids)``
AllCapability          ``all()``
PaginatedCapability    ``page(n)``, ``pages()``, ``iter()``
AuthenticatedCapability  (marker: the endpoint needs an access token)
=====================  =====================================================

A class that declares a descriptor must compose exactly the mixins matching
the descriptor's capability set; a mismatch raises ``CapabilityError`` when
the class is created. An unsupported capability is therefore simply an
absent method, never a runtime surprise.

Content vs. envelope: the plain methods return decoded content, the
``*_response`` variants (and ``page``) return the
:class:`~gw2.webapi.models.response.ApiV2Response` with its metadata.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterable, Sequence
from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from ..core.enums import Capability
from ..core.exceptions import CapabilityError, InvalidArgumentError
from ..core.request import build_request, format_ids
from ..models.response import ApiV2Response
from ..models.results import BulkResult, PartialResult
from ..runtime.chunking import ChunkExecutor, ChunkPlanner, extract_chunk_policy
from ..runtime.pagination import PagedSequence
from ..runtime.rest.runner import ModelAdapter, ResponseAdapter, RestRunner

if TYPE_CHECKING:
    from ..core.connection import Connection
    from ..core.endpoint import EndpointDescriptor

T = TypeVar("T")


@lru_cache(maxsize=None)
def adapter_for(type_: Any) -> ResponseAdapter:
    """Shared adapter per content type (None passes decoded JSON through)."""
    if type_ is None:
        return ResponseAdapter()
    return ModelAdapter(type_)


def item_id_of(item: Any, id_field: str) -> Any:
    """Read an item's id from a mapping key or an attribute."""
    if isinstance(item, dict):
        return item.get(id_field)
    return getattr(item, id_field, None)


def merge_by_ids(
    requested: Sequence[Any],
    responses: Sequence[ApiV2Response[list[Any]]],
    id_field: str = "id",
) -> BulkResult[Any]:
    """Merge chunk responses into one result ordered like ``requested``.

    Ids are compared by their string form so ``1`` matches ``"1"``. Items the
    API returned for ids that were not requested are dropped.
    """
    found: dict[str, Any] = {}
    for response in responses:
        for item in response.content or []:
            key = item_id_of(item, id_field)
            if key is not None:
                found.setdefault(str(key), item)

    items: list[Any] = []
    missing: list[Any] = []
    for item_id in requested:
        item = found.get(str(item_id))
        if item is None:
            missing.append(item_id)
        else:
            items.append(item)

    partial = PartialResult(missing_ids=tuple(missing)) if missing else None
    return BulkResult(items=items, partial=partial, responses=tuple(responses))


class BaseEndpointClient(Generic[T]):
    """Shared plumbing for endpoint clients.

    Args:
        connection: Connection used for every request of this client
        **path_params: Values for the descriptor's ``:placeholder`` segments
    """

    descriptor: ClassVar[EndpointDescriptor | None] = None
    capability: ClassVar[Capability | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        descriptor = cls.__dict__.get("descriptor")
        if descriptor is None:
            return
        provided = cls.provided_capabilities()
        if provided != descriptor.capabilities:
            declared = sorted(c.value for c in descriptor.capabilities)
            composed = sorted(c.value for c in provided)
            raise CapabilityError(
                f"{cls.__name__}: descriptor '{descriptor.name}' declares {declared} "
                f"but the class composes {composed}"
            )

    @classmethod
    def provided_capabilities(cls) -> frozenset[Capability]:
        """Capabilities contributed by the mixins in this class's MRO."""
        return frozenset(
            klass.__dict__["capability"]
            for klass in cls.__mro__
            if klass.__dict__.get("capability") is not None
        )

    def __init__(self, connection: Connection, **path_params: Any) -> None:
        descriptor = type(self).descriptor
        if descriptor is None:
            raise TypeError(f"{type(self).__name__} has no endpoint descriptor")
        missing = [name for name in descriptor.placeholders if path_params.get(name) in (None, "")]
        if missing:
            raise InvalidArgumentError(
                f"{descriptor.name}: missing path parameter(s) {', '.join(missing)}"
            )

        self._connection = connection
        self._runner = RestRunner(connection)
        self._path_params = dict(path_params)

    @property
    def _adapter(self) -> ResponseAdapter:
        return adapter_for(self.endpoint.model)

    @property
    def _list_adapter(self) -> ResponseAdapter:
        model = self.endpoint.model
        return adapter_for(None if model is None else list[model])  # type: ignore[valid-type]

    @property
    def _ids_adapter(self) -> ResponseAdapter:
        return adapter_for(list[int | str])

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def endpoint(self) -> EndpointDescriptor:
        descriptor = type(self).descriptor
        if descriptor is None:
            raise TypeError(f"{type(self).__name__} has no endpoint descriptor")
        return descriptor

    @property
    def path_params(self) -> dict[str, Any]:
        return dict(self._path_params)

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self._path_params.items())
        return f"{type(self).__name__}({self.endpoint.path!r}{', ' if params else ''}{params})"

    async def _request(
        self,
        *,
        adapter: ResponseAdapter,
        item_id: Any = None,
        query: dict[str, Any] | None = None,
    ) -> ApiV2Response[Any]:
        request = build_request(
            self._connection,
            self.endpoint,
            path_params=self._path_params,
            item_id=item_id,
            query=query,
        )
        return await self._runner.run(request, adapter)

    async def _fetch_ids(self) -> list[Any]:
        response = await self._request(adapter=self._ids_adapter)
        return list(response.content or [])

    async def _fetch_many(self, ids: Iterable[Any]) -> BulkResult[T]:
        policy = extract_chunk_policy(self.endpoint, self._connection)
        plans = ChunkPlanner(policy, endpoint_id=self.endpoint.name).plan(ids)

        async def fetch_chunk(plan: Any) -> ApiV2Response[Any]:
            return await self._request(adapter=self._list_adapter, query={"ids": format_ids(plan.ids)})

        result = await ChunkExecutor(policy).execute(plans=plans, fetch_chunk=fetch_chunk)
        requested = [item_id for plan in plans for item_id in plan.ids]
        return merge_by_ids(requested, result.data, self.endpoint.id_field)

    def _resolve_page_size(self, page_size: int | None) -> int:
        size = self.endpoint.default_page_size if page_size is None else page_size
        if not 1 <= size <= self.endpoint.max_page_size:
            raise InvalidArgumentError(
                f"page_size must be between 1 and {self.endpoint.max_page_size}, got {size}"
            )
        return size


class SingleCapability(BaseEndpointClient[T]):
    """Endpoint returning one object at its path."""

    capability = Capability.SINGLE

    async def get(self) -> T:
        return (await self.get_response()).content

    async def get_response(self) -> ApiV2Response[T]:
        return await self._request(adapter=self._adapter)


class BlobCapability(BaseEndpointClient[T]):
    """Endpoint returning a whole collection (or document) without ids."""

    capability = Capability.BLOB

    async def get(self) -> T:
        return (await self.get_response()).content

    async def get_response(self) -> ApiV2Response[T]:
        return await self._request(adapter=self._adapter)


class ByIdCapability(BaseEndpointClient[T]):
    """Endpoint returning one item at ``<path>/<id>``."""

    capability = Capability.BY_ID

    async def get(self, item_id: Any) -> T:
        return (await self.get_response(item_id)).content

    async def get_response(self, item_id: Any) -> ApiV2Response[T]:
        if item_id is None:
            raise InvalidArgumentError("id must not be None")
        return await self._request(adapter=self._adapter, item_id=item_id)


class ByIdsCapability(BaseEndpointClient[T]):
    """Endpoint listing its ids and returning items for an id batch."""

    capability = Capability.BY_IDS

    async def ids(self) -> list[Any]:
        """All ids the endpoint knows."""
        return await self._fetch_ids()

    async def many(self, ids: Iterable[Any]) -> BulkResult[T]:
        """Items for ``ids``, chunked to the API's batch limit.

        The result keeps the requested order; ids the API omitted are
        reported in ``result.partial``.

        Raises:
            InvalidArgumentError: If ``ids`` is empty
        """
        return await self._fetch_many(ids)


class AllCapability(BaseEndpointClient[T]):
    """Endpoint that can return every item."""

    capability = Capability.ALL

    async def all(self) -> BulkResult[T]:
        """Every item, via ``ids=all`` when offered, else listed ids in chunks."""
        if self.endpoint.supports_ids_all:
            response = await self._request(adapter=self._list_adapter, query={"ids": "all"})
            return BulkResult(items=list(response.content or []), responses=(response,))
        ids = await self._fetch_ids()
        if not ids:
            return BulkResult(items=[])
        return await self._fetch_many(ids)


class PaginatedCapability(BaseEndpointClient[T]):
    """Endpoint supporting ``page``/``page_size``."""

    capability = Capability.PAGINATED

    async def page(self, page: int, page_size: int | None = None) -> ApiV2Response[list[T]]:
        """Fetch one page (zero-based)."""
        if page < 0:
            raise InvalidArgumentError(f"page must not be negative, got {page}")
        size = self._resolve_page_size(page_size)
        return await self._request(
            adapter=self._list_adapter, query={"page": page, "page_size": size}
        )

    def pages(self, page_size: int | None = None) -> PagedSequence[T]:
        """Lazy, restartable sequence of pages starting at page 0."""
        size = self._resolve_page_size(page_size)
        return PagedSequence(self.page, size, endpoint_id=self.endpoint.name)

    def iter(self, page_size: int | None = None) -> AsyncIterator[T]:
        """Lazy sequence of all items across pages."""
        return self.pages(page_size).items()


class AuthenticatedCapability(BaseEndpointClient[T]):
    """Marker for endpoints that need an access token.

    Requests raise ``AuthenticationRequiredError`` before any I/O when the
    connection carries no token.
    """

    capability = Capability.AUTHENTICATED

    @property
    def has_token(self) -> bool:
        return self._connection.authenticated
