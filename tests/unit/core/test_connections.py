"""
Tests for nodelink.core.connections module.

Tests the connection records and the append-only store.
"""

import logging

import pytest

from nodelink.core.connections import Connection, ConnectionStore, Endpoint
from nodelink.core.errors import InvalidConnectionError, NodeLinkError, UnknownEndpointError
from nodelink.core.types import Vec2


def link(start_node, start_port, end_node, end_port):
    return Connection(Endpoint(start_node, start_port), Endpoint(end_node, end_port))


class TestConnection:
    """Tests for Connection dataclass."""

    def test_endpoint_str(self):
        """Test endpoints print as node:port."""
        assert str(Endpoint("a", "pa")) == "a:pa"

    def test_equality_ignores_id(self):
        """Test identical endpoints compare equal even with distinct ids."""
        first = link("a", "pa", "b", "pb")
        second = link("a", "pa", "b", "pb")

        assert first == second
        assert first.connection_id != second.connection_id

    def test_direction_matters(self):
        """Test reversed connections are not equal."""
        assert link("a", "pa", "b", "pb") != link("b", "pb", "a", "pa")

    def test_is_self_loop(self):
        """Test self loops are detected by node, not port."""
        assert link("a", "p1", "a", "p2").is_self_loop
        assert not link("a", "p1", "b", "p1").is_self_loop


class TestConnectionStore:
    """Tests for ConnectionStore."""

    def test_append_and_order(self, store):
        """Test all() returns connections in insertion order."""
        first = link("a", "pa", "b", "pb")
        second = link("b", "pb", "c", "pc")
        store.append(first)
        store.append(second)

        assert store.all() == (first, second)
        assert len(store) == 2

    def test_self_loop_rejected(self, store):
        """Test a connection to the same node raises and stores nothing."""
        with pytest.raises(InvalidConnectionError, match="to itself"):
            store.append(link("a", "pa", "a", "pa2"))

        assert len(store) == 0

    def test_self_loop_error_types(self, store):
        """Test the error is a NodeLinkError and a ValueError."""
        with pytest.raises(NodeLinkError):
            store.append(link("a", "p1", "a", "p1"))
        with pytest.raises(ValueError):
            store.append(link("a", "p1", "a", "p1"))

    def test_duplicates_allowed(self, store):
        """Test the store keeps duplicate connections."""
        store.append(link("a", "pa", "b", "pb"))
        store.append(link("a", "pa", "b", "pb"))

        assert len(store) == 2
        assert store.all()[0] == store.all()[1]

    def test_all_is_a_copy(self, store):
        """Test the returned tuple does not change on later appends."""
        snapshot = store.all()
        store.append(link("a", "pa", "b", "pb"))

        assert snapshot == ()


class TestEndpointResolution:
    """Tests for resolve_endpoint and segments."""

    def test_resolve_endpoint(self, store, node1, node2):
        """Test endpoints resolve to live port centers."""
        nodes = {"node1": node1, "node2": node2}

        assert store.resolve_endpoint("node1", "port1", nodes) == Vec2(150, 150)

        node1.translate(Vec2(10, 20))
        assert store.resolve_endpoint("node1", "port1", nodes) == Vec2(160, 170)

    def test_unknown_node(self, store, node1):
        """Test an unknown node raises UnknownEndpointError."""
        with pytest.raises(UnknownEndpointError, match="ghost"):
            store.resolve_endpoint("ghost", "port1", {"node1": node1})

    def test_unknown_port(self, store, node1):
        """Test an unknown port on a known node raises UnknownEndpointError."""
        with pytest.raises(LookupError):
            store.resolve_endpoint("node1", "port2", {"node1": node1})

    def test_resolve_unknown_endpoint(self, store, node1):
        """Test resolving a dangling connection raises."""
        with pytest.raises(UnknownEndpointError):
            store.resolve(link("node1", "port1", "node2", "port2"), {"node1": node1})

    def test_segments(self, store, node1, node2):
        """Test segments resolve every connection in order."""
        nodes = {"node1": node1, "node2": node2}
        store.append(link("node1", "port1", "node2", "port2"))
        store.append(link("node2", "port2", "node1", "port1"))

        assert store.segments(nodes) == [
            (Vec2(150, 150), Vec2(450, 150)),
            (Vec2(450, 150), Vec2(150, 150)),
        ]

    def test_segments_skip_unknown_endpoint(self, store, node1, node2, caplog):
        """Test a dangling connection is logged and left out, not drawn as a default line."""
        store.append(link("node1", "port1", "node2", "port2"))
        dangling = link("node1", "port1", "ghost", "port9")
        store.append(dangling)

        with caplog.at_level(logging.ERROR, logger="nodelink.core.connections"):
            segments = store.segments({"node1": node1, "node2": node2})

        assert segments == [(Vec2(150, 150), Vec2(450, 150))]
        assert dangling.connection_id in caplog.text
        assert len(store) == 2
