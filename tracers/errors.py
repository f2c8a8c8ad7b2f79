"""Exceptions raised by the tracers."""


class TraceError(Exception):
    """Base class for trace generation failures."""


class InvalidSourceError(TraceError, ValueError):
    """The requested source node is not part of the graph."""

    def __init__(self, source_id):
        super().__init__(f"Source node '{source_id}' is not in the graph")
        self.source_id = source_id
