"""
Exceptions raised by the NodeLink core.
"""


class NodeLinkError(Exception):
    """Base exception for diagram errors."""
    pass


class InvalidConnectionError(NodeLinkError, ValueError):
    """Raised when a connection would link a node to itself."""

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Cannot connect node {node_id} to itself")


class UnknownEndpointError(NodeLinkError, LookupError):
    """Raised when a node or port id cannot be resolved."""

    def __init__(self, node_id: str, port_id: str = None):
        self.node_id = node_id
        self.port_id = port_id
        if port_id is None:
            message = f"Unknown node: {node_id}"
        else:
            message = f"Unknown endpoint: {node_id}:{port_id}"
        super().__init__(message)
