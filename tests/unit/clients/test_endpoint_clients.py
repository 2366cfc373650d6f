"""Unit tests for the endpoint client capability types."""

from __future__ import annotations

import json
from urllib.parse import parse_qs, urlsplit

import pytest
from pydantic import BaseModel

from gw2.webapi.clients import (
    AllCapability,
    AuthenticatedCapability,
    BlobCapability,
    ByIdCapability,
    ByIdsCapability,
    PaginatedCapability,
    SingleCapability,
    build_client_class,
    merge_by_ids,
)
from gw2.webapi.core.endpoint import EndpointDescriptor
from gw2.webapi.core.enums import Capability
from gw2.webapi.core.exceptions import (
    AuthenticationRequiredError,
    CapabilityError,
    InvalidArgumentError,
    NotFoundError,
    PartialResultError,
)
from gw2.webapi.models import ApiV2Response
from gw2.webapi.runtime.pagination import PagedSequence
from gw2.webapi.runtime.rest.transport import TransportResponse


class Thing(BaseModel):
    id: int
    name: str


THINGS = EndpointDescriptor.define(
    "things",
    "things",
    {Capability.BY_ID, Capability.BY_IDS, Capability.ALL, Capability.PAGINATED},
    model=Thing,
    max_ids_per_request=2,
)
THINGS_WITH_ALL = EndpointDescriptor.define(
    "things.all", "things", {Capability.BY_IDS, Capability.ALL}, model=Thing, supports_ids_all=True
)
SECRET = EndpointDescriptor.define(
    "secret", "secret", {Capability.BLOB, Capability.AUTHENTICATED}, model=list[str]
)
STATUS = EndpointDescriptor.define("status", "status", {Capability.SINGLE})
NESTED = EndpointDescriptor.define("parents.children", "parents/:id/children", {Capability.BLOB})


def query_of(url: str) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlsplit(url).query).items()}


def things_by_ids(url: str) -> TransportResponse:
    """Echo known ids (1..10) from the ``ids`` parameter, in reverse order."""
    ids = [int(i) for i in query_of(url)["ids"].split(",")]
    body = [{"id": i, "name": f"thing {i}"} for i in reversed(ids) if 1 <= i <= 10]
    return TransportResponse(200, {}, json.dumps(body).encode())


class TestClassComposition:
    """Test capability checks at class creation."""

    def test_generated_class_matches_descriptor(self):
        cls = build_client_class(THINGS)

        assert cls.provided_capabilities() == THINGS.capabilities
        assert issubclass(cls, ByIdCapability)
        assert issubclass(cls, PaginatedCapability)
        assert not issubclass(cls, SingleCapability)

    def test_mismatched_class_rejected(self):
        with pytest.raises(CapabilityError):

            class Broken(BlobCapability):
                descriptor = STATUS

    def test_missing_capability_rejected(self):
        with pytest.raises(CapabilityError):

            class Incomplete(BlobCapability):
                descriptor = SECRET

    def test_hand_written_class_accepted(self):
        class SecretClient(BlobCapability, AuthenticatedCapability):
            descriptor = SECRET

        assert SecretClient.provided_capabilities() == SECRET.capabilities

    def test_unsupported_operations_absent(self, connection):
        client = build_client_class(STATUS)(connection)

        assert hasattr(client, "get")
        assert not hasattr(client, "many")
        assert not hasattr(client, "pages")

    def test_abstract_mixin_not_instantiable(self, connection):
        with pytest.raises(TypeError):
            SingleCapability(connection)

    def test_endpoint_without_descriptor_raises(self):
        class Detached(build_client_class(STATUS)):
            descriptor = None

        client = object.__new__(Detached)
        with pytest.raises(TypeError):
            client.endpoint

    def test_missing_path_parameter(self, connection):
        with pytest.raises(InvalidArgumentError):
            build_client_class(NESTED)(connection)


class TestSingleAndBlob:
    """Test get() for single and blob endpoints."""

    @pytest.mark.asyncio
    async def test_single_get(self, connection, transport):
        transport.add("/v2/status", {"ok": True})

        assert await build_client_class(STATUS)(connection).get() == {"ok": True}

    @pytest.mark.asyncio
    async def test_get_response_returns_envelope(self, connection, transport):
        transport.add("/v2/status", {"ok": True}, headers={"X-Rate-Limit-Limit": "600"})

        response = await build_client_class(STATUS)(connection).get_response()

        assert isinstance(response, ApiV2Response)
        assert response.rate_limit_limit == 600
        assert response.content == {"ok": True}

    @pytest.mark.asyncio
    async def test_blob_requires_token_before_io(self, connection, transport):
        client = build_client_class(SECRET)(connection)

        with pytest.raises(AuthenticationRequiredError):
            await client.get()
        assert transport.calls == []
        assert client.has_token is False

    @pytest.mark.asyncio
    async def test_blob_with_token(self, auth_connection, transport):
        transport.add("/v2/secret", ["a", "b"])

        assert await build_client_class(SECRET)(auth_connection).get() == ["a", "b"]
        assert transport.calls[0][2]["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_path_parameters_substituted(self, connection, transport):
        transport.add("/v2/parents/7/children", [1, 2])

        client = build_client_class(NESTED)(connection, id=7)

        assert await client.get() == [1, 2]
        assert client.path_params == {"id": 7}


class TestByIdAndByIds:
    """Test get(id), ids() and many(ids)."""

    @pytest.mark.asyncio
    async def test_get_by_id_parses_model(self, connection, transport):
        transport.add("/v2/things/1?", {"id": 1, "name": "one"})

        thing = await build_client_class(THINGS)(connection).get(1)

        assert thing == Thing(id=1, name="one")

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, connection):
        with pytest.raises(NotFoundError):
            await build_client_class(THINGS)(connection).get(999)

    @pytest.mark.asyncio
    async def test_ids(self, connection, transport):
        transport.add("/v2/things?v=", [1, 2, 3])

        assert await build_client_class(THINGS)(connection).ids() == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_many_reports_missing_ids(self, connection, transport):
        """ids [1, 2, 3, 999] yield items 1, 2, 3 and 999 as missing."""
        transport.add_callback("/v2/things?ids=", things_by_ids)

        result = await build_client_class(THINGS)(connection).many([1, 2, 3, 999])

        assert [t.id for t in result.items] == [1, 2, 3]
        assert result.partial is not None
        assert result.partial.missing_ids == (999,)
        with pytest.raises(PartialResultError):
            result.raise_for_partial()

    @pytest.mark.asyncio
    async def test_many_chunks_and_keeps_caller_order(self, connection, transport):
        transport.add_callback("/v2/things?ids=", things_by_ids)

        result = await build_client_class(THINGS)(connection).many([5, 3, 1, 4, 2])

        assert [t.id for t in result] == [5, 3, 1, 4, 2]
        assert result.partial is None
        assert len(result.responses) == 3
        assert sorted(query_of(url)["ids"] for url in transport.urls()) == ["1,4", "2", "5,3"]

    @pytest.mark.asyncio
    async def test_many_collapses_duplicates(self, connection, transport):
        transport.add_callback("/v2/things?ids=", things_by_ids)

        result = await build_client_class(THINGS)(connection).many([2, 2, 1])

        assert [t.id for t in result] == [2, 1]
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_many_empty_rejected_before_io(self, connection, transport):
        with pytest.raises(InvalidArgumentError):
            await build_client_class(THINGS)(connection).many([])
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_many_second_call_served_from_cache(self, connection, transport):
        transport.add_callback("/v2/things?ids=", things_by_ids)
        client = build_client_class(THINGS)(connection)

        await client.many([1, 2])
        result = await client.many([1, 2])

        assert result.cached is True
        assert len(transport.calls) == 1


class TestAll:
    """Test all()."""

    @pytest.mark.asyncio
    async def test_ids_all_in_one_call(self, connection, transport):
        transport.add("ids=all", [{"id": 1, "name": "one"}, {"id": 2, "name": "two"}])

        result = await build_client_class(THINGS_WITH_ALL)(connection).all()

        assert [t.id for t in result] == [1, 2]
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_falls_back_to_id_list(self, connection, transport):
        transport.add("/v2/things?v=", [1, 2, 3])
        transport.add_callback("/v2/things?ids=", things_by_ids)

        result = await build_client_class(THINGS)(connection).all()

        assert [t.id for t in result] == [1, 2, 3]
        assert len(transport.calls) == 3

    @pytest.mark.asyncio
    async def test_empty_id_list(self, connection, transport):
        transport.add("/v2/things?v=", [])

        result = await build_client_class(THINGS)(connection).all()

        assert result.items == []
        assert len(transport.calls) == 1


class TestPaginated:
    """Test page(), pages() and iter()."""

    @pytest.mark.asyncio
    async def test_page(self, connection, transport):
        transport.add(
            "page=1",
            [{"id": 3, "name": "three"}],
            headers={"X-Page-Total": "2", "X-Page-Size": "2", "X-Result-Total": "3"},
        )

        response = await build_client_class(THINGS)(connection).page(1, page_size=2)

        assert response.content == [Thing(id=3, name="three")]
        assert response.page_total == 2
        assert query_of(transport.urls()[0])["page_size"] == "2"

    @pytest.mark.asyncio
    async def test_iter_walks_every_page(self, connection, transport):
        headers = {"X-Page-Total": "2", "X-Result-Total": "3"}
        transport.add("page=0", [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}], headers=headers)
        transport.add("page=1", [{"id": 3, "name": "c"}], headers=headers)

        client = build_client_class(THINGS)(connection)
        names = [thing.name async for thing in client.iter(page_size=2)]

        assert names == ["a", "b", "c"]
        assert len(transport.calls) == 2

    @pytest.mark.asyncio
    async def test_second_pass_from_cache_stops_at_last_page(self, connection, transport):
        headers = {"X-Page-Total": "3", "X-Result-Total": "6"}
        for page in range(3):
            body = [{"id": i, "name": f"thing {i}"} for i in (2 * page + 1, 2 * page + 2)]
            transport.add(f"page={page}", body, headers=headers)
        transport.add("page=3", {"text": "page out of range. Use values between 0 and 2"}, status=400)
        client = build_client_class(THINGS)(connection)

        first = await client.pages(page_size=2).to_list()
        second = await client.pages(page_size=2).to_list()

        assert [t.id for t in first] == [t.id for t in second] == [1, 2, 3, 4, 5, 6]
        assert len(transport.calls) == 3

    def test_pages_returns_sequence(self, connection):
        pages = build_client_class(THINGS)(connection).pages()

        assert isinstance(pages, PagedSequence)
        assert pages.page_size == THINGS.default_page_size

    @pytest.mark.parametrize("page_size", [0, 201])
    def test_page_size_validated(self, connection, page_size):
        with pytest.raises(InvalidArgumentError):
            build_client_class(THINGS)(connection).pages(page_size=page_size)

    @pytest.mark.asyncio
    async def test_negative_page_rejected(self, connection):
        with pytest.raises(InvalidArgumentError):
            await build_client_class(THINGS)(connection).page(-1)


class TestMergeByIds:
    """Test merge_by_ids directly."""

    def test_string_and_int_ids_match(self):
        response = ApiV2Response(content=[{"id": 1}, {"id": 2}], cached=False)

        result = merge_by_ids(["2", "1"], [response])

        assert result.items == [{"id": 2}, {"id": 1}]

    def test_custom_id_field(self):
        response = ApiV2Response(content=[{"name": "Zojja"}], cached=False)

        result = merge_by_ids(["Zojja", "Snaff"], [response], id_field="name")

        assert result.items == [{"name": "Zojja"}]
        assert result.partial.missing_ids == ("Snaff",)

    def test_unrequested_items_dropped(self):
        response = ApiV2Response(content=[{"id": 1}, {"id": 42}], cached=False)
        assert merge_by_ids([1], [response]).items == [{"id": 1}]


def test_all_capability_mixins_distinct():
    mixins = {SingleCapability, BlobCapability, ByIdCapability, ByIdsCapability, AllCapability,
              PaginatedCapability, AuthenticatedCapability}
    assert {m.capability for m in mixins} == set(Capability)
