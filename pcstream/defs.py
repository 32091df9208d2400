"""Shared constants, component kinds and the package error type."""

from enum import IntEnum

UNINITIALIZED = -1
MAX_BUFF = 0xFFFF
BW_DEFAULT = UNINITIALIZED
RATIO_DEFAULT = UNINITIALIZED

FLOAT_ERROR = 1e-6
FLOAT_HALF = 0.5


class PcstreamError(Exception):
    """Raised when a streaming component cannot do what was asked."""


class BwEstimatorType(IntEnum):
    """Bandwidth estimation strategies."""

    HARMONIC = 1


class HttpVersion(IntEnum):
    """HTTP protocol versions used for fetching content."""

    HTTP_1_1 = 0
    HTTP_2_0 = 1
    HTTP_3_0 = 2


class LodSelectorType(IntEnum):
    """Level-of-detail selection strategies."""

    DP_BASED = 1
    LM_BASED = 2
    EQUAL = 3
    HYBRID = 4


class RequestHandlerType(IntEnum):
    """Request handler flavours."""

    H2 = 1


class ViewportEstimatorType(IntEnum):
    """Viewport prediction strategies."""

    VELOCITY = 1


class VisibilityComputerType(IntEnum):
    """Visibility computation strategies."""

    HULL = 1


class VideoDecoderType(IntEnum):
    """Point cloud codecs a decoder can be built for."""

    MPEG_VPCC = 0
    MPEG_GPCC = 1
    GOOGLE_DRACO = 2
    PCL = 3