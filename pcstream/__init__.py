"""Point cloud streaming helpers: vectors, viewport estimation, visibility and segment requests."""

__version__ = "0.1.0"
__all__ = [
    "defs",
    "vec3f",
    "viewport_estimator",
    "visibility_computer",
    "request_handler",
]