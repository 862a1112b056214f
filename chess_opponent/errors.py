from __future__ import annotations


class EngineError(Exception):
    """Base class for errors raised by the chess opponent."""


class IllegalMoveError(EngineError, ValueError):
    """The rules layer rejected a move for the given position."""


class StaleMoveError(EngineError):
    """A selected move is no longer legal for the position it is returned for."""
