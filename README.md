# nvglide

nvglide holds the state and animation logic behind a smooth graphical front end for a
modal text editor. It covers cursor motion and blinking, cursor effects,
window placement and scrolling, font options, window geometry and settings
handling. Every piece takes plain values and returns plain values. It can
drive any rendering layer, and each piece can be tested on its own.

The package needs only the standard library.

## Installation

```
pip install nvglide
```

To run the test suite:

```
pip install "nvglide[test]"
pytest
```

## Modules

- `nvglide.animation`: the easing functions `ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
  `ease_in_out_cubic`, `ease_in_expo` and `ease_out_expo`. It also has `lerp`,
  `ease` and `ease_point`, and an immutable `Point` vector type with
  `length`, `normalized`, `dot` and `is_zero`.
- `nvglide.font_options`: `FontOptions.parse` reads a `guifont` string such
  as `"Fira Code Mono:h15:b:i:#h-slight:#e-alias"`. It uses the
  `FontHinting` and `FontEdging` enums and the helpers `parse_font_name` and
  `points_to_pixels`.
- `nvglide.values`: `parse_float`, `parse_u64`, `parse_u32`, `parse_i32`,
  `parse_str` and `parse_bool`. Each one logs an error and keeps the
  current value when the incoming value has the wrong type.
- `nvglide.settings`: the `Settings` registry. It stores one settings object
  per type through `set` and `get`, and registers update and read handlers
  for the editor variables `g:neovide_<name>`. The methods
  `read_initial_values` and `setup_changed_listeners` are coroutines. They
  take an editor connection object that has `get_var`, `set_var` and
  `command`. `handle_changed_notification` dispatches a `[name, value]`
  change notification. A shared instance is available as `SETTINGS`.
- `nvglide.window_geometry`: `parse_window_geometry` reads strings such as
  `"100x50"`. `save_window_geometry`, `load_last_window_settings` and
  `last_window_geometry` persist the window as `Maximized` or as `Windowed`
  (a position plus a `Dimensions` size) in a JSON file. By default that file
  is at `settings_path()`. A file that cannot be read raises
  `WindowSettingsError`.
- `nvglide.cursor`: `CursorShape`, `CursorSettings` and the animated
  `Corner`, together with `corners_for_shape` and `cursor_destination`.
- `nvglide.blink`: `BlinkStatus.update_status` takes a `BlinkTiming` and
  moves through the `BlinkState` phases. It reports whether the cursor is
  visible and when the next change is due.
- `nvglide.cursor_vfx`: `VfxMode` and `parse_vfx_mode`, and the effects
  `PointHighlight` and `ParticleTrail`, created with `new_cursor_vfx`. It
  also has the deterministic `PcgRng` and `rotate_vec`.
- `nvglide.window_state`: `WindowAnimation` holds a window's animated
  position, viewport scrolling and visibility. Padding is given as a
  `WindowPadding`.
- `nvglide.renderer`: `RendererSettings` and `order_windows`, which puts
  root windows first, sorted by id, and then floating windows, sorted by
  `floating_sort_key`.
- `nvglide.profiler`: `Profiler` keeps the last 48 frame times. It reports
  their statistics and lays out the points of the frame-time graph.
- `nvglide.running`: `RunningTracker` holds the running flag and the exit
  code. A shared instance is available as `RUNNING_TRACKER`.

## Examples

```python
from nvglide.animation import ease, ease_in_out_cubic

ease(ease_in_out_cubic, 1.0, 0.0, 0.25)   # 0.9375
```

```python
from nvglide.font_options import FontOptions, FontHinting

opts = FontOptions.parse("Fira_Code_Mono:h15:b:#h-slight")
opts.primary_font()              # "Fira Code Mono"
opts.hinting is FontHinting.SLIGHT
```

```python
from nvglide.window_geometry import parse_window_geometry

parse_window_geometry("100x50")   # Dimensions(width=100, height=50)
parse_window_geometry("0x50")     # raises ValueError
```

## What it does not do

nvglide does not open a window and does not draw anything. It does not load
or shape fonts, and it does not connect to or start the editor. It has no
command-line program. The caller supplies the rendering layer and the
editor connection, and feeds them the values this package computes.