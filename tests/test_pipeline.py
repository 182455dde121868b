import pytest

from image_processor import BlurCascade
from pipeline import ARMED, UNARMED, ControlPoints, GlowPipeline


@pytest.fixture
def pipeline(fake_link):
    return GlowPipeline(fake_link, flip=False, cascade=BlurCascade(64, 64, depth=1))


def test_control_points_arm_on_fourth_point(corner_points):
    points = ControlPoints()

    results = [points.add(x, y) for x, y in corner_points]

    assert results == [False, False, False, True]
    assert points.state == ARMED


def test_fifth_point_restarts_collection(corner_points):
    points = ControlPoints()
    for x, y in corner_points:
        points.add(x, y)

    assert points.add(0.5, 0.5) is False
    assert points.state == UNARMED
    assert points.points == [(0.5, 0.5)]


def test_control_point_must_be_normalized():
    with pytest.raises(ValueError):
        ControlPoints().add(1.5, 0.2)


def test_armed_pipeline_builds_three_lines(pipeline, corner_points):
    pipeline.set_control_points(corner_points)

    assert pipeline.armed
    assert [len(line) for line in pipeline.lines] == [5, 8, 5]
    assert pipeline.lines[1].start == corner_points[1]
    assert pipeline.lines[2].end == corner_points[3]


def test_disarm_drops_lines(pipeline, corner_points):
    pipeline.set_control_points(corner_points)
    pipeline.add_control_point(0.3, 0.3)

    assert pipeline.state == UNARMED
    assert pipeline.lines == []
    assert len(pipeline.control_points) == 1


def test_unarmed_sends_demo_colors(pipeline, fake_link):
    packet = pipeline.update(0.2)

    assert pipeline.mode == "demo"
    assert fake_link.packets == [packet]
    assert len(packet) == 53


def test_output_rate_is_limited(pipeline, fake_link):
    assert pipeline.update(0.05) is None
    assert pipeline.update(0.11) is not None
    assert pipeline.update(0.15) is None
    assert pipeline.update(0.22) is not None
    assert len(fake_link.packets) == 2


def test_no_frame_skips_sampling(pipeline, corner_points):
    pipeline.set_control_points(corner_points)

    assert pipeline.process_capture() is False
    assert pipeline.cascade.final_level is None
    assert all(c == (0.0, 0.0, 0.0) for line in pipeline.lines for c in line.colors())


def test_sampling_runs_once_per_frame_step(pipeline, corner_points, red_frame):
    pipeline.set_control_points(corner_points)
    pipeline.submit_frame(red_frame)

    for _ in range(3):
        pipeline.update(0.0)

    expected = 1 - 0.9 ** 3
    for line in pipeline.lines:
        for color in line.colors():
            assert color == pytest.approx((expected, 0.0, 0.0))


def test_uniform_red_scenario(pipeline, fake_link, corner_points, red_frame):
    pipeline.set_control_points(corner_points)
    pipeline.submit_frame(red_frame)

    for _ in range(60):
        pipeline.process_capture()

    for line in pipeline.lines:
        for r, g, b in line.colors():
            assert r == pytest.approx(1 - 0.9 ** 60)
            assert g == b == 0.0

    # At 60 steps red encodes as 0xfe, full 0xff needs at least 63
    for _ in range(40):
        pipeline.process_capture()

    colors = pipeline.prepare_sampled_colors()
    packet = pipeline.send_colors()

    assert len(colors) == 16
    assert packet == b"GLOW\x10" + b"\xff\x00\x00" * 16
    assert fake_link.packets == [packet]


def test_sampled_colors_take_segment_prefixes(pipeline, corner_points):
    pipeline.set_control_points(corner_points)
    for i, line in enumerate(pipeline.lines):
        for j, sample in enumerate(line.samples):
            sample.color = (0.0, 0.0, (i * 10 + j) / 100)

    colors = pipeline.prepare_sampled_colors()
    values = [round(b ** (2 / 3) * 100) for _, _, b in colors]

    assert values == [0, 1, 2, 3, 10, 11, 12, 13, 14, 15, 16, 20, 21, 22, 23, 24]


def test_flip_reverses_wire_order(fake_link):
    pipeline = GlowPipeline(fake_link, flip=True)
    pipeline.colors = [(i / 15, 0.0, 0.0) for i in range(16)]

    packet = pipeline.send_colors()

    assert packet[5] == 255
    assert packet[-3] == 0
    assert pipeline.colors[0] == (0.0, 0.0, 0.0)
    assert pipeline.toggle_flip() is False


def test_runs_without_link():
    pipeline = GlowPipeline(link=None)
    assert pipeline.update(1.0) is not None
