import pytest

from nvglide.animation import Point
from nvglide.renderer import RendererSettings
from nvglide.window_geometry import Dimensions
from nvglide.window_state import MAX_SNAPSHOTS, WindowAnimation, WindowPadding

FONT = Dimensions(width=8, height=16)


def make_window(position=Point(0.0, 0.0), size=Dimensions(10, 5), padding=WindowPadding()):
    return WindowAnimation(1, position, size, padding)


def run_until_still(window, settings, limit=200):
    for _ in range(limit):
        if not window.update(settings, 0.05):
            return True
    return False


def test_new_window_is_not_animating():
    window = make_window(Point(2.0, 3.0))
    assert window.update(RendererSettings(), 0.016) is False
    assert window.grid_current_position == Point(2.0, 3.0)
    assert window.hidden is False


def test_leaving_origin_does_not_animate():
    window = make_window()
    window.position((4.0, 6.0), (10, 5), None, FONT)
    assert window.grid_destination == Point(4.0, 6.0)
    assert window.update(RendererSettings(), 0.016) is False
    assert window.grid_current_position.x == pytest.approx(4.0, abs=1e-4)
    assert window.grid_current_position.y == pytest.approx(6.0, abs=1e-4)


def test_move_from_placed_window_animates_to_destination():
    settings = RendererSettings()
    window = make_window(Point(2.0, 2.0))
    window.position((12.0, 7.0), (10, 5), None, FONT)
    assert window.update(settings, 0.01) is True
    assert 2.0 < window.grid_current_position.x < 12.0
    assert run_until_still(window, settings)
    assert window.grid_current_position.x == pytest.approx(12.0, abs=1e-3)
    assert window.grid_current_position.y == pytest.approx(7.0, abs=1e-3)


def test_negative_position_is_clamped():
    window = make_window(Point(3.0, 4.0))
    window.position((-5.0, -2.0), (10, 5), None, FONT)
    assert window.grid_destination == Point(0.0, 0.0)


def test_padding_offsets_destination():
    window = make_window(padding=WindowPadding(top=8, left=4))
    window.position((1.0, 1.0), (10, 5), None, FONT)
    assert window.grid_destination == Point(1.5, 1.5)


def test_resize_is_reported():
    window = make_window()
    assert window.position((0.0, 0.0), (20, 5), None, FONT) is True
    assert window.grid_size == Dimensions(20, 5)
    assert window.position((0.0, 0.0), (20, 5), None, FONT) is False


def test_floating_order_is_recorded():
    window = make_window()
    window.position((0.0, 0.0), (10, 5), 3, FONT)
    assert window.floating_order == 3
    assert window.is_floating
    window.position((0.0, 0.0), (10, 5), None, FONT)
    assert not window.is_floating


def test_position_while_hidden_shows_without_animation():
    window = make_window(Point(2.0, 2.0))
    window.hide()
    assert window.hidden is True
    window.position((9.0, 9.0), (10, 5), None, FONT)
    assert window.hidden is False
    assert window.grid_start_position == window.grid_destination
    assert window.update(RendererSettings(), 0.01) is False


def test_show_snaps_to_destination():
    window = make_window(Point(2.0, 2.0))
    window.position((9.0, 9.0), (10, 5), None, FONT)
    window.hide()
    window.show()
    assert window.hidden is False
    assert window.grid_start_position == window.grid_destination
    assert window.update(RendererSettings(), 0.01) is False


def test_viewport_same_line_is_ignored():
    window = make_window()
    assert window.viewport(0.0) is False
    assert list(window.snapshot_top_lines) == []


def test_viewport_records_snapshots_and_limits_them():
    window = make_window()
    for line in range(1, 9):
        assert window.viewport(float(line)) is True
    assert window.top_line == 8
    assert len(window.snapshot_top_lines) == MAX_SNAPSHOTS
    assert list(window.snapshot_top_lines) == [3, 4, 5, 6, 7]


def test_scroll_offset_uses_override_until_draw():
    window = make_window()
    window.viewport(10.0)
    assert window.scroll_offset(16) == 0.0
    window.draw_line()
    assert window.scroll_offset(16) == 10 * 16


def test_scroll_animation_finishes_and_clears_snapshots():
    settings = RendererSettings()
    window = make_window()
    window.viewport(10.0)
    window.draw_line()
    assert window.update(settings, 0.01) is True
    assert 0.0 < window.current_scroll < 10.0
    assert run_until_still(window, settings)
    assert list(window.snapshot_top_lines) == []
    assert window.current_scroll == pytest.approx(10.0, abs=1e-3)
    assert window.scroll_offset(16) == pytest.approx(0.0, abs=0.05)


def test_clear_drops_snapshots():
    window = make_window()
    window.viewport(3.0)
    window.clear()
    assert list(window.snapshot_top_lines) == []


def test_snapshot_offsets_newest_first():
    window = make_window()
    window.viewport(2.0)
    window.viewport(5.0)
    offsets = window.snapshot_offsets(16)
    assert offsets == [2 * 16, 0.0]


def test_pixel_region_matches_grid():
    window = make_window(Point(2.0, 3.0), Dimensions(10, 5))
    region = window.pixel_region(FONT)
    assert (region.left, region.top) == (2.0 * FONT.width, 3.0 * FONT.height)
    assert region.right - region.left == 10 * FONT.width
    assert region.bottom - region.top == 5 * FONT.height