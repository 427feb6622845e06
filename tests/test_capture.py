"""Geometry capture state machine."""

import pytest

from estimator.models import CanvasParams, ElementKind, Point, StrokeMode
from estimator.core.capture import CaptureState, GeometryCapture
from estimator.core.tools import ActiveTool


def _tool(kind: ElementKind, stroke: StrokeMode = StrokeMode.FREEHAND) -> ActiveTool:
    return ActiveTool(option_id="opt", label="Option", kind=kind, stroke=stroke)


@pytest.fixture()
def capture(id_factory) -> GeometryCapture:
    return GeometryCapture(CanvasParams(scale_px_per_m=50), id_factory)


def test_marker_commits_on_begin(capture):
    element = capture.begin(Point(x=10, y=20), _tool(ElementKind.LARGE_MARKER))

    assert element is not None
    assert element.kind is ElementKind.LARGE_MARKER
    assert element.points == (Point(x=10, y=20),)
    assert element.length_m is None and element.area_m2 is None
    assert capture.state is CaptureState.IDLE


def test_line_gesture_measures_length(capture):
    assert capture.begin(Point(x=0, y=0), _tool(ElementKind.SEGMENT)) is None
    assert capture.state is CaptureState.DRAWING
    capture.extend(Point(x=30, y=40))
    capture.extend(Point(x=130, y=40))
    element = capture.end(Point(x=130, y=40))

    assert element is not None
    assert element.points == (Point(x=0, y=0), Point(x=30, y=40), Point(x=130, y=40))
    assert element.length_m == pytest.approx(150 / 50)
    assert element.area_m2 is None
    assert element.option_label == "Option"
    assert capture.state is CaptureState.IDLE


def test_release_point_is_appended_after_moves(capture):
    capture.begin(Point(x=0, y=0), _tool(ElementKind.DASHED_SEGMENT))
    capture.extend(Point(x=50, y=0))
    element = capture.end(Point(x=100, y=0))

    assert len(element.points) == 3
    assert element.length_m == pytest.approx(2.0)


def test_polygon_gesture_measures_area(capture):
    capture.begin(Point(x=0, y=0), _tool(ElementKind.POLYGON_AREA))
    for x, y in [(100, 0), (100, 50), (0, 50)]:
        capture.extend(Point(x=x, y=y))
    element = capture.end(Point(x=0, y=50))

    assert element.area_m2 == pytest.approx(5000 / 2500)
    assert element.length_m is None


def test_press_and_release_without_move_is_dropped(capture):
    capture.begin(Point(x=5, y=5), _tool(ElementKind.SEGMENT))
    assert capture.end(Point(x=40, y=40)) is None
    assert capture.state is CaptureState.IDLE


def test_extend_and_end_ignored_while_idle(capture):
    capture.extend(Point(x=1, y=1))
    assert capture.end(Point(x=2, y=2)) is None
    assert capture.preview == ()


def test_two_point_stroke_keeps_only_endpoints(capture):
    capture.begin(Point(x=0, y=0), _tool(ElementKind.SEGMENT, StrokeMode.TWO_POINT))
    for x in range(10, 200, 10):
        capture.extend(Point(x=x, y=x / 2))
        assert len(capture.preview) == 2
    element = capture.end(Point(x=150, y=0))

    assert element.points == (Point(x=0, y=0), Point(x=150, y=0))
    assert element.length_m == pytest.approx(3.0)


def test_two_point_area_commits_rectangle(capture):
    capture.begin(Point(x=50, y=50), _tool(ElementKind.POLYGON_AREA, StrokeMode.TWO_POINT))
    capture.extend(Point(x=120, y=90))
    element = capture.end(Point(x=150, y=100))

    assert len(element.points) == 4
    assert element.area_m2 == pytest.approx((100 * 50) / 2500)


def test_begin_while_drawing_restarts_gesture(capture):
    capture.begin(Point(x=0, y=0), _tool(ElementKind.SEGMENT))
    capture.extend(Point(x=500, y=500))
    capture.begin(Point(x=10, y=10), _tool(ElementKind.SEGMENT))
    capture.extend(Point(x=60, y=10))
    element = capture.end(Point(x=60, y=10))

    assert element.points == (Point(x=10, y=10), Point(x=60, y=10))


def test_each_commit_gets_a_fresh_id(capture):
    tool = _tool(ElementKind.SINGLE_MARKER)
    ids = {capture.begin(Point(x=i, y=i), tool).id for i in range(5)}
    assert len(ids) == 5


def test_length_is_translation_invariant(capture):
    def draw(dx: float, dy: float) -> float:
        capture.begin(Point(x=dx, y=dy), _tool(ElementKind.SEGMENT))
        capture.extend(Point(x=dx + 70, y=dy + 24))
        capture.extend(Point(x=dx + 10, y=dy + 90))
        return capture.end(Point(x=dx + 10, y=dy + 90)).length_m

    assert draw(0, 0) == pytest.approx(draw(333, 41))
