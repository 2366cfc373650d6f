"""Unit tests for EndpointDescriptor."""

from __future__ import annotations

import pytest

from gw2.webapi.core.endpoint import EndpointDescriptor
from gw2.webapi.core.enums import Capability
from gw2.webapi.core.exceptions import CapabilityError, InvalidArgumentError


class TestEndpointDescriptor:
    """Test descriptor validation and helpers."""

    def test_define_freezes_capabilities_and_strips_path(self):
        descriptor = EndpointDescriptor.define("items", "/items/", [Capability.BY_ID, Capability.BY_IDS])

        assert descriptor.path == "items"
        assert descriptor.capabilities == frozenset({Capability.BY_ID, Capability.BY_IDS})
        assert descriptor.supports(Capability.BY_IDS)
        assert not descriptor.supports(Capability.PAGINATED)

    def test_defaults(self):
        descriptor = EndpointDescriptor.define("items", "items", [Capability.BY_IDS])

        assert descriptor.max_ids_per_request == 200
        assert descriptor.default_page_size == 50
        assert descriptor.max_page_size == 200
        assert descriptor.schema_version == "2019-02-21T00:00:00.000Z"
        assert descriptor.id_field == "id"
        assert descriptor.localized is False

    def test_authenticated_property(self):
        assert EndpointDescriptor.define("a", "a", [Capability.SINGLE, Capability.AUTHENTICATED]).authenticated
        assert not EndpointDescriptor.define("b", "b", [Capability.SINGLE]).authenticated

    @pytest.mark.parametrize(
        "capabilities",
        [
            {Capability.SINGLE, Capability.BY_ID},
            {Capability.SINGLE, Capability.BLOB},
            {Capability.BLOB, Capability.BY_ID},
        ],
    )
    def test_conflicting_getters_rejected(self, capabilities):
        with pytest.raises(CapabilityError):
            EndpointDescriptor.define("x", "x", capabilities)

    def test_all_requires_by_ids_or_ids_all(self):
        with pytest.raises(CapabilityError):
            EndpointDescriptor.define("x", "x", {Capability.ALL})

        descriptor = EndpointDescriptor.define("x", "x", {Capability.ALL}, supports_ids_all=True)
        assert descriptor.supports(Capability.ALL)

    def test_page_size_limits_validated(self):
        with pytest.raises(CapabilityError):
            EndpointDescriptor.define("x", "x", {Capability.PAGINATED}, default_page_size=500)

    def test_placeholders_and_build_path(self):
        descriptor = EndpointDescriptor.define(
            "characters.crafting", "characters/:id/crafting", {Capability.BLOB}
        )

        assert descriptor.placeholders == ("id",)
        assert descriptor.build_path({"id": "Rytlock Brimstone"}) == "characters/Rytlock%20Brimstone/crafting"

    def test_build_path_quotes_slashes(self):
        descriptor = EndpointDescriptor.define("x", "things/:name", {Capability.BLOB})
        assert descriptor.build_path({"name": "a/b"}) == "things/a%2Fb"

    def test_build_path_rejects_missing_value(self):
        descriptor = EndpointDescriptor.define("x", "things/:name", {Capability.BLOB})

        with pytest.raises(InvalidArgumentError):
            descriptor.build_path({})
        with pytest.raises(InvalidArgumentError):
            descriptor.build_path({"name": ""})

    def test_descriptors_hashable(self):
        first = EndpointDescriptor.define("x", "x", {Capability.SINGLE})
        second = EndpointDescriptor.define("x", "x", {Capability.SINGLE})
        assert hash(first) == hash(second)
        assert first == second
