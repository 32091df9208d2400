# pcstream

Client-side building blocks for adaptive point cloud streaming. It predicts
the viewer's next camera matrix, turns a hull's screen coverage into a
checked visibility ratio, and fetches manifests and segments from a DASH
server.

## Installation

```
pip install .
```

Running the tests needs pytest, which the `test` extra brings in:

```
pip install ".[test]"
pytest
```

## Modules

- `pcstream.defs`: the `PcstreamError` exception, raised by every component
  when it cannot do what was asked, and the enumerations `BwEstimatorType`,
  `HttpVersion`, `LodSelectorType`, `RequestHandlerType`,
  `ViewportEstimatorType`, `VisibilityComputerType` and `VideoDecoderType`.
- `pcstream.vec3f`: the frozen value types `Vec2f` and `Vec3f`. `Vec3f`
  supports `+`, `-` and component-wise `*`, plus `scale`, `truncate`,
  `inverse`, `magnitude`, `normalize`, `dot`, `cross`, `angle_between`,
  `reflect`, `quantize`, `mvp_mul` (column-major 4x4 matrix with
  perspective divide), `rotate` (angle in radians about an axis), and the
  tolerant comparisons `is_close`, `greater`, `less`, `greater_equal` and
  `less_equal`. The scalar helpers `float_error`, `float_equal` and
  `quantize` live here too.
- `pcstream.viewport_estimator`: `ViewportEstimator(deltat, kind)` takes the
  frame interval in milliseconds (it must be positive). `post` extrapolates
  the camera position and view direction `dtec` milliseconds ahead, and
  `es_mvp()` returns the estimated 4x4 view matrix as a flat tuple of 16
  floats, row by row. It raises `PcstreamError` if a view direction is zero
  or the two directions are parallel.
- `pcstream.visibility_computer`: `VisibilityComputer.post(mvp, hull)` asks
  `hull.screen_ratio(mvp)` for the fraction of the screen it covers and
  stores it. A value outside `[0, 1]` raises `PcstreamError`. `ratio()`
  returns the stored value, and raises if none has been computed yet.
- `pcstream.request_handler`: `parse_mpd` reads an MPD document into
  `Mpd`, `Period`, `AdaptationSet`, `Representation`, `SegmentTemplate` and
  `SegmentTimelineEntry` objects. `format_template` expands
  `$RepresentationID$`, `$AdaptationSetID$` and `$Number%<spec>$`, and
  `merge_url_path` joins a base URL and a path. `http_get` downloads a URL
  and returns the body and the download speed in bytes per second.
  `RequestHandler` ties these together.

## Example

```python
from pcstream.defs import ViewportEstimatorType
from pcstream.vec3f import Vec3f
from pcstream.viewport_estimator import ViewportEstimator

estimator = ViewportEstimator(33, ViewportEstimatorType.VELOCITY)
estimator.post(
    Vec3f(0.0, 0.0, 1.0), Vec3f(0.0, 0.0, 0.9),
    Vec3f(0.0, 0.0, -1.0), Vec3f(0.1, 0.0, -1.0),
    33,
)
matrix = estimator.es_mvp()  # 16 floats, row by row
```

Fetching segments:

```python
from pcstream.request_handler import RequestHandler

handler = RequestHandler()
handler.post_init(
    "http://localhost:8080/bin.mpd",
    "http://localhost:8080/info.mpd",
    "http://localhost:8080/hull.mpd",
    "http://localhost:8080",
)
info_list, hull_list = handler.init_data()
handler.post_segment([0] * handler.seq_count)
contents = handler.segment()
speeds = handler.dl_speeds()  # bytes per second, one per sequence
```

`post_init` counts the segments from the first representation's timeline,
plus one for the initialisation segment. It then downloads every info
segment and, for each sequence, every hull segment. Each call to
`post_segment` downloads the next segment of every sequence at the
representation index you pass for it. Segment 0 uses the initialisation
template and the later segments use the media template.

`RequestHandler` takes a `fetch` callable `(url, version) -> (body, speed)`,
so you can plug in your own transport. By default it uses `http_get`, which
goes through `urllib`. The HTTP version passed to it is only a preference.

## What the package does not do

- It has no bandwidth estimator, level-of-detail selector or point cloud
  decoder. `BwEstimatorType`, `LodSelectorType` and `VideoDecoderType` only
  name those strategies. Choosing versions and decoding the downloaded
  bytes is up to you.
- It has no mesh type. The hull passed to `VisibilityComputer.post` must be
  an object of your own that has a `screen_ratio(mvp)` method.
- It has no command-line tool and no player or renderer.