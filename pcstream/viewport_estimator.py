"""Prediction of the viewer's future camera matrix from recent motion."""

from __future__ import annotations

from .defs import PcstreamError, ViewportEstimatorType
from .vec3f import Vec3f

_UP = Vec3f(0.0, 1.0, 0.0)
_ZERO = Vec3f()


class ViewportEstimator:
    """Estimates a view matrix by extrapolating position and view direction.

    ``deltat`` is the time between two consecutive frames in milliseconds.
    Every estimator kind currently uses the velocity model.
    """

    def __init__(
        self,
        deltat: int,
        kind: ViewportEstimatorType | int = ViewportEstimatorType.VELOCITY,
    ) -> None:
        if deltat <= 0:
            raise PcstreamError(f"frame interval must be positive, got {deltat}")
        self.deltat = deltat
        self.kind = kind
        self._es_mvp: tuple[float, ...] = (0.0,) * 16

    def post(
        self,
        p_curr: Vec3f,
        p_old: Vec3f,
        v_curr: Vec3f,
        v_old: Vec3f,
        dtec: int,
    ) -> None:
        """Estimate the view matrix ``dtec`` milliseconds ahead.

        ``p_curr``/``p_old`` are the current and previous camera positions,
        ``v_curr``/``v_old`` the current and previous view directions.
        """
        velocity = (p_curr - p_old).scale(dtec / self.deltat)
        p_es = p_curr + velocity

        mag_curr = v_curr.magnitude()
        mag_old = v_old.magnitude()
        if mag_curr == 0.0 or mag_old == 0.0:
            raise PcstreamError("view directions must be non-zero vectors")
        dtheta = v_curr.dot(v_old) / mag_curr / mag_old

        axis = v_curr.cross(v_old).normalize()
        if axis == _ZERO:
            raise PcstreamError("view directions are parallel; no rotation axis")
        v_es = v_curr.rotate(dtheta, axis)

        target = p_es + v_es
        fwd = (target - p_es).normalize()
        side = fwd.cross(_UP).normalize()
        up = side.cross(fwd).normalize()

        self._es_mvp = (
            side.x, side.y, side.z, -side.dot(p_es),
            up.x, up.y, up.z, -up.dot(p_es),
            -fwd.x, -fwd.y, -fwd.z, -fwd.dot(p_es),
            0.0, 0.0, 0.0, 1.0,
        )

    def es_mvp(self) -> tuple[float, ...]:
        """The estimated 4x4 matrix as 16 floats, row by row."""
        return self._es_mvp