from dataclasses import dataclass, field
from typing import Optional

import pytest

from nvglide.animation import Point
from nvglide.renderer import RendererSettings, floating_sort_key, order_windows


@dataclass
class FakeWindow:
    id: int
    hidden: bool = False
    floating_order: Optional[int] = None
    grid_current_position: Point = field(default_factory=Point)


def test_renderer_settings_defaults():
    settings = RendererSettings()
    assert settings.position_animation_length == 0.15
    assert settings.scroll_animation_length == 0.3
    assert settings.floating_opacity == 0.7
    assert settings.floating_blur is True
    assert settings.floating_blur_amount_x == 2.0
    assert settings.floating_blur_amount_y == 2.0
    assert settings.debug_renderer is False
    assert settings.profiler is False
    assert settings.underline_automatic_scaling is False


def test_floating_sort_key_uses_order_and_position():
    window = FakeWindow(id=3, floating_order=7, grid_current_position=Point(4.0, 5.0))
    assert floating_sort_key(window) == (7, 4.0, 5.0)


def test_floating_sort_key_rejects_root_window():
    with pytest.raises(ValueError):
        floating_sort_key(FakeWindow(id=1))


def test_root_windows_sorted_by_id_before_floating():
    windows = [
        FakeWindow(id=5, floating_order=1),
        FakeWindow(id=3),
        FakeWindow(id=1),
        FakeWindow(id=2, floating_order=0),
    ]
    ordered = order_windows(windows)
    assert [w.id for w in ordered] == [1, 3, 2, 5]


def test_hidden_windows_are_dropped():
    windows = [
        FakeWindow(id=1),
        FakeWindow(id=2, hidden=True),
        FakeWindow(id=3, floating_order=0, hidden=True),
        FakeWindow(id=4, floating_order=0),
    ]
    ordered = order_windows(windows)
    assert [w.id for w in ordered] == [1, 4]
    assert all(not w.hidden for w in ordered)


def test_floating_ties_broken_by_x_then_y():
    windows = [
        FakeWindow(id=10, floating_order=1, grid_current_position=Point(2.0, 9.0)),
        FakeWindow(id=11, floating_order=1, grid_current_position=Point(1.0, 9.0)),
        FakeWindow(id=12, floating_order=1, grid_current_position=Point(1.0, 3.0)),
        FakeWindow(id=13, floating_order=0, grid_current_position=Point(50.0, 50.0)),
    ]
    ordered = order_windows(windows)
    assert [w.id for w in ordered] == [13, 12, 11, 10]


def test_order_windows_empty():
    assert order_windows([]) == []


def test_order_windows_preserves_all_visible():
    windows = [FakeWindow(id=i, floating_order=(i % 3 or None)) for i in range(1, 10)]
    ordered = order_windows(windows)
    assert sorted(w.id for w in ordered) == list(range(1, 10))
    floating_seen = False
    for window in ordered:
        if window.floating_order is not None:
            floating_seen = True
        else:
            assert not floating_seen