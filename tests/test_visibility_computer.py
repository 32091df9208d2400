import pytest

from pcstream.defs import PcstreamError, VisibilityComputerType
from pcstream.visibility_computer import VisibilityComputer


class FakeHull:
    def __init__(self, value):
        self.value = value
        self.seen = None

    def screen_ratio(self, mvp):
        self.seen = mvp
        return self.value


IDENTITY = (1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0)


def test_ratio_before_post_raises():
    comp = VisibilityComputer(VisibilityComputerType.HULL)
    with pytest.raises(PcstreamError):
        comp.ratio()


@pytest.mark.parametrize("value", [0.0, 0.25, 1.0])
def test_valid_ratio_is_stored(value):
    comp = VisibilityComputer()
    comp.post(IDENTITY, FakeHull(value))
    assert comp.ratio() == value


def test_matrix_is_passed_to_hull():
    hull = FakeHull(0.5)
    VisibilityComputer().post(IDENTITY, hull)
    assert hull.seen == IDENTITY


@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_out_of_range_ratio_raises_and_resets(value):
    comp = VisibilityComputer()
    comp.post(IDENTITY, FakeHull(0.4))
    with pytest.raises(PcstreamError):
        comp.post(IDENTITY, FakeHull(value))
    with pytest.raises(PcstreamError):
        comp.ratio()


def test_unknown_kind_behaves_like_hull():
    comp = VisibilityComputer(42)
    comp.post(IDENTITY, FakeHull(0.75))
    assert comp.ratio() == 0.75


def test_later_post_replaces_ratio():
    comp = VisibilityComputer()
    comp.post(IDENTITY, FakeHull(0.1))
    comp.post(IDENTITY, FakeHull(0.9))
    assert comp.ratio() == 0.9