"""Exceptions raised by canvas-layout."""

from __future__ import annotations


class LayoutError(ValueError):
    """Base class for caller errors (bad algorithm, bad document)."""


class UnknownAlgorithmError(LayoutError):
    """Raised when a layout is requested with an unrecognized algorithm id."""

    def __init__(self, algorithm: object) -> None:
        self.algorithm = algorithm
        super().__init__(
            f"Unknown layout algorithm {algorithm!r}; expected one of: "
            "force, circular, grid, random"
        )

    def __reduce__(self):
        return (type(self), (self.algorithm,))


class DocumentError(LayoutError):
    """Raised when an input document cannot be turned into nodes and edges."""
