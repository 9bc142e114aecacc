"""Exceptions raised by the Connect-4 engine and agents."""


class Connect4Error(Exception):
    """Base class for errors raised by this package."""


class SearchFailure(Connect4Error):
    """A background move search terminated abnormally."""


class ProtocolError(Connect4Error):
    """An agent or caller broke the turn protocol (e.g. chose a full column)."""
