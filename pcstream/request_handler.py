"""Fetching of manifests and content segments for a point cloud stream."""

from __future__ import annotations

import time
import urllib.error
import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Callable, Sequence

from .defs import HttpVersion, PcstreamError, RequestHandlerType

Fetcher = Callable[[str, HttpVersion], "tuple[bytes, int]"]

_REPRESENTATION_ID = "$RepresentationID$"
_ADAPTATION_SET_ID = "$AdaptationSetID$"
_NUMBER_PREFIX = "$Number%"


def format_template(
    template: str,
    adaptation_set_id: int,
    representation_id: str,
    number: int,
) -> str:
    """Expand a segment template.

    Supports ``$RepresentationID$``, ``$AdaptationSetID$`` and
    ``$Number%<printf spec>$``. A ``$Number%`` with no closing ``$`` ends
    the expansion there.
    """
    parts: list[str] = []
    pos = 0
    length = len(template)
    while pos < length:
        if template.startswith(_REPRESENTATION_ID, pos):
            parts.append(representation_id)
            pos += len(_REPRESENTATION_ID)
        elif template.startswith(_ADAPTATION_SET_ID, pos):
            parts.append(str(adaptation_set_id))
            pos += len(_ADAPTATION_SET_ID)
        elif template.startswith(_NUMBER_PREFIX, pos):
            start = pos + len(_NUMBER_PREFIX)
            end = template.find("$", start)
            if end < 0:
                break
            spec = template[start:end]
            try:
                parts.append(("%" + spec) % number)
            except (TypeError, ValueError) as exc:
                raise PcstreamError(f"bad number format {spec!r}") from exc
            pos = end + 1
        else:
            parts.append(template[pos])
            pos += 1
    return "".join(parts)


def merge_url_path(base: str, path: str) -> str:
    """Join ``base`` and ``path``, adding a ``/`` only where neither has one."""
    need_slash = bool(base) and not base.endswith("/") and bool(path) and not path.startswith("/")
    return f"{base}/{path}" if need_slash else base + path


@dataclass(frozen=True)
class SegmentTimelineEntry:
    """One ``S`` element of a segment timeline."""

    start: int = 0
    duration: int = 0
    repeat_count: int = 0


@dataclass(frozen=True)
class SegmentTemplate:
    """URL templates of a representation and its optional timeline."""

    media: str | None = None
    initialization: str | None = None
    timeline: tuple[SegmentTimelineEntry, ...] | None = None


@dataclass(frozen=True)
class Representation:
    """One version of an adaptation set."""

    id: str = ""
    segment_template: SegmentTemplate | None = None


@dataclass(frozen=True)
class AdaptationSet:
    """A content sequence with its available representations."""

    id: int = 0
    representations: tuple[Representation, ...] = ()


@dataclass(frozen=True)
class Period:
    """A period of the presentation."""

    adaptation_sets: tuple[AdaptationSet, ...] = ()


@dataclass(frozen=True)
class Mpd:
    """A parsed media presentation description."""

    periods: tuple[Period, ...] = ()


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(elem: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in elem if _local(child.tag) == name]


def _int_attr(elem: ET.Element, name: str, default: int) -> int:
    value = elem.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise PcstreamError(f"attribute {name!r} is not an integer: {value!r}") from exc


def _parse_template(elem: ET.Element) -> SegmentTemplate:
    timeline_elems = _children(elem, "SegmentTimeline")
    timeline: tuple[SegmentTimelineEntry, ...] | None = None
    if timeline_elems:
        timeline = tuple(
            SegmentTimelineEntry(
                start=_int_attr(s, "t", 0),
                duration=_int_attr(s, "d", 0),
                repeat_count=_int_attr(s, "r", 0),
            )
            for s in _children(timeline_elems[0], "S")
        )
    return SegmentTemplate(
        media=elem.get("media"),
        initialization=elem.get("initialization"),
        timeline=timeline,
    )


def _parse_adaptation_set(elem: ET.Element) -> AdaptationSet:
    set_templates = _children(elem, "SegmentTemplate")
    inherited = _parse_template(set_templates[0]) if set_templates else None
    representations = []
    for rep in _children(elem, "Representation"):
        own = _children(rep, "SegmentTemplate")
        template = _parse_template(own[0]) if own else inherited
        representations.append(Representation(id=rep.get("id", ""), segment_template=template))
    return AdaptationSet(id=_int_attr(elem, "id", 0), representations=tuple(representations))


def parse_mpd(text: str | bytes) -> Mpd:
    """Parse an MPD document into periods, adaptation sets and representations."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise PcstreamError(f"malformed MPD: {exc}") from exc
    if _local(root.tag) != "MPD":
        raise PcstreamError(f"root element is {_local(root.tag)!r}, not 'MPD'")
    periods = tuple(
        Period(adaptation_sets=tuple(_parse_adaptation_set(a) for a in _children(p, "AdaptationSet")))
        for p in _children(root, "Period")
    )
    return Mpd(periods=periods)


def http_get(url: str, version: HttpVersion | int = HttpVersion.HTTP_2_0) -> tuple[bytes, int]:
    """Download ``url`` and return its body and the download speed in bytes/s.

    The requested protocol version is a preference; the transport negotiates
    what it supports.
    """
    started = time.perf_counter()
    try:
        with urllib.request.urlopen(url) as response:
            data = response.read()
    except (urllib.error.URLError, ValueError, OSError) as exc:
        raise PcstreamError(f"failed to fetch {url}: {exc}") from exc
    elapsed = time.perf_counter() - started
    speed = int(len(data) / elapsed) if elapsed > 0 else 0
    return data, speed


def _first_period(mpd: Mpd) -> Period:
    if not mpd.periods:
        raise PcstreamError("MPD has no period")
    return mpd.periods[0]


def _adaptation_set(period: Period, index: int) -> AdaptationSet:
    try:
        return period.adaptation_sets[index]
    except IndexError as exc:
        raise PcstreamError(f"no adaptation set {index}") from exc


def _representation(adaptation_set: AdaptationSet, index: int) -> Representation:
    if index < 0 or index >= len(adaptation_set.representations):
        raise PcstreamError(f"adaptation set {adaptation_set.id} has no representation {index}")
    return adaptation_set.representations[index]


def _template_for(rep: Representation, segment: int) -> str:
    template = rep.segment_template
    if template is None:
        raise PcstreamError(f"representation {rep.id!r} has no segment template")
    chosen = template.initialization if segment == 0 else template.media
    if chosen is None:
        kind = "initialization" if segment == 0 else "media"
        raise PcstreamError(f"representation {rep.id!r} has no {kind} template")
    return chosen


def _segment_count(rep: Representation) -> int:
    template = rep.segment_template
    if template is None or template.timeline is None:
        raise PcstreamError(f"representation {rep.id!r} has no segment timeline")
    media_segments = sum(1 + max(entry.repeat_count, 0) for entry in template.timeline)
    return media_segments + 1  # plus the init segment


class RequestHandler:
    """Downloads stream metadata, hulls and the selected content segments.

    ``fetch`` takes a URL and an HTTP version and returns the body and the
    download speed in bytes per second; it defaults to :func:`http_get`.
    """

    def __init__(
        self,
        kind: RequestHandlerType | int = RequestHandlerType.H2,
        fetch: Fetcher | None = None,
    ) -> None:
        self.kind = kind
        self._fetch: Fetcher = fetch if fetch is not None else http_get
        self.seq_count = 0
        self.rep_count = 0
        self.seg_count = 0
        self.curr_seg = 0
        self.base_url: str | None = None
        self._bin_mpd: Mpd | None = None
        self._info_list: list[bytes] | None = None
        self._hull_list: list[list[bytes]] | None = None
        self._curr_content: list[bytes] | None = None
        self._dl_speeds: list[int] | None = None

    def _get(self, url: str) -> tuple[bytes, int]:
        return self._fetch(url, HttpVersion.HTTP_2_0)

    def _get_mpd(self, url: str) -> Mpd:
        data, _ = self._get(url)
        return parse_mpd(data)

    def _fetch_segment(self, adaptation_set: AdaptationSet, rep: Representation, segment: int) -> tuple[bytes, int]:
        path = format_template(_template_for(rep, segment), adaptation_set.id, rep.id, segment)
        assert self.base_url is not None
        return self._get(merge_url_path(self.base_url, path))

    def post_init(self, bin_mpd_url: str, info_mpd_url: str, hull_mpd_url: str, base_url: str) -> None:
        """Fetch the three manifests and all info and hull segments."""
        bin_mpd = self._get_mpd(bin_mpd_url)
        info_mpd = self._get_mpd(info_mpd_url)
        hull_mpd = self._get_mpd(hull_mpd_url)

        self.base_url = base_url
        self._bin_mpd = bin_mpd

        period = _first_period(bin_mpd)
        first_set = _adaptation_set(period, 0)
        first_rep = _representation(first_set, 0)
        self.seq_count = len(period.adaptation_sets)
        self.rep_count = len(first_set.representations)
        self.seg_count = _segment_count(first_rep)

        info_set = _adaptation_set(_first_period(info_mpd), 0)
        info_rep = _representation(info_set, 0)
        self._info_list = [self._fetch_segment(info_set, info_rep, seg)[0] for seg in range(self.seg_count)]

        hull_period = _first_period(hull_mpd)
        hull_list = []
        for seq in range(self.seq_count):
            hull_set = _adaptation_set(hull_period, seq)
            hull_rep = _representation(hull_set, 0)
            hull_list.append([self._fetch_segment(hull_set, hull_rep, seg)[0] for seg in range(self.seg_count)])
        self._hull_list = hull_list

        self._curr_content = [b""] * self.seq_count
        self._dl_speeds = [0] * self.seq_count
        self.curr_seg = 0

    def post_segment(self, selection: Sequence[int]) -> None:
        """Fetch the next segment of every sequence at the selected versions."""
        if self._bin_mpd is None or self._curr_content is None or self._dl_speeds is None:
            raise PcstreamError("request handler is not initialised")
        if len(selection) < self.seq_count:
            raise PcstreamError(f"expected {self.seq_count} selections, got {len(selection)}")
        period = _first_period(self._bin_mpd)
        segment = self.curr_seg
        for seq, version in zip(range(self.seq_count), selection):
            adaptation_set = _adaptation_set(period, seq)
            rep = _representation(adaptation_set, version)
            data, speed = self._fetch_segment(adaptation_set, rep, segment)
            self._curr_content[seq] = data
            self._dl_speeds[seq] = speed
        self.curr_seg += 1

    def init_data(self) -> tuple[list[bytes], list[list[bytes]]]:
        """The info segments and, per sequence, the hull segments."""
        if self._info_list is None or self._hull_list is None:
            raise PcstreamError("request handler is not initialised")
        return list(self._info_list), [list(row) for row in self._hull_list]

    def segment(self) -> list[bytes]:
        """The content last fetched for each sequence."""
        if self._curr_content is None:
            raise PcstreamError("request handler is not initialised")
        return list(self._curr_content)

    def dl_speeds(self) -> list[int]:
        """The download speed of the last fetch per sequence, in bytes/s."""
        if self._dl_speeds is None:
            raise PcstreamError("request handler is not initialised")
        return list(self._dl_speeds)