"""Screen-space visibility of a content's hull."""

from __future__ import annotations

from typing import Protocol, Sequence

from .defs import RATIO_DEFAULT, PcstreamError, VisibilityComputerType


class Hull(Protocol):
    """Anything that can report the screen ratio it covers under a matrix."""

    def screen_ratio(self, mvp: Sequence[float]) -> float: ...


class VisibilityComputer:
    """Computes the fraction of the screen covered by a hull.

    Every computer kind currently uses the hull's own screen ratio.
    """

    def __init__(
        self,
        kind: VisibilityComputerType | int = VisibilityComputerType.HULL,
    ) -> None:
        self.kind = kind
        self._ratio: float = float(RATIO_DEFAULT)

    def post(self, mvp: Sequence[float], hull: Hull) -> None:
        """Compute the visible ratio of ``hull`` under the matrix ``mvp``."""
        ratio = hull.screen_ratio(mvp)
        if ratio < 0 or ratio > 1.0:
            self._ratio = float(RATIO_DEFAULT)
            raise PcstreamError(f"screen ratio {ratio} is outside [0, 1]")
        self._ratio = ratio

    def ratio(self) -> float:
        """The last computed ratio; raises if none has been computed."""
        if self._ratio < 0:
            raise PcstreamError("no visibility ratio has been computed")
        return self._ratio