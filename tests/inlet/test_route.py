import pytest

from fabricctl.errors import ConfigurationError
from fabricctl.inlet.route import DEFAULT_TO_ROUTE, Route, default_to_route


def test_parse_and_render():
    r = Route.parse("/node/n2/service/outlet")
    assert r.segments == (("node", "n2"), ("service", "outlet"))
    assert str(r) == "/node/n2/service/outlet"


def test_default_route_starts_with_project():
    r = default_to_route()
    assert str(r) == DEFAULT_TO_ROUTE
    assert r.starts_with_project()
    assert not Route.parse("/service/outlet").starts_with_project()


@pytest.mark.parametrize("text", [
    "service/outlet",
    "/service",
    "/bogus/x",
    "/tcp/abc",
    "/service//node/x",
])
def test_invalid_routes(text):
    with pytest.raises(ConfigurationError):
        Route.parse(text)


def test_resolve_nodes_rewrites_node_hops():
    ports = {"n2": 4100}
    r = Route.parse("/node/n2/service/outlet").resolve_nodes(ports.get)
    assert str(r) == "/ip4/127.0.0.1/tcp/4100/service/outlet"


def test_resolve_nodes_without_listener_fails():
    with pytest.raises(ConfigurationError, match="no TCP listener"):
        Route.parse("/node/ghost/service/outlet").resolve_nodes(lambda name: None)
