# pixmorph

pixmorph is the data and editing core of a tool that morphs one video into
another. You place control points on frames of two input videos. The points
follow optical flow through time, and you link points across the two videos.
The settings are stored in a project's `settings.xml`.

The package is plain Python on top of numpy. It has no windows, no GPU code
and no command-line entry point. You drive it from your own scripts or tests.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Modules

### `pixmorph.model`

- `Parameters` holds everything the editor works on:
  - the left and right tracks (`lp`, `rp`: lists of lists of `ControlPoint`);
  - connection groups (`cnt`: lists of `Connection`);
  - the active `(track, frame)` selections (`active_l`, `active_r`);
  - the current frames (`frame0`, `frame1`) and `total_frame`;
  - the solver settings `w_ssim`, `ssim_clamp`, `w_tps`, `w_ui`, `w_temp`, `max_iter`, `max_iter_drop_factor`, `eps`, `start_res` and `bcond`.
- `Parameters` methods:
  - `reset()` restores the default settings and drops all tracks and selections. It keeps connections, frames and the frame count.
  - `clear_points()` removes tracks, connections and selections.
  - `tracks(side)`, `frame(side)`, `active(side)` and `set_active(side, index)` pick the left or right data.
- `ControlPoint(x, y, z, w=1, weight=1.0)` is one point of a track. `z` is the frame. `w` is 1 for a user anchor and 0 for a propagated point.
- `Connection(left, right)` links a left `(track, frame)` pair to a right one.
- `Side` has `LEFT` (`"l"`) and `RIGHT` (`"r"`).
- `BoundaryCondition` has `NONE`, `CORNER` and `BORDER`.

### `pixmorph.editing`

- `PointEditor(side, parameters, image_size, view_size)` turns mouse input on one side into edits:
  - `press(x, y, button)`: a `Button.LEFT` press selects the point within 3 pixels of the click on the current frame, or starts a new track. `Button.RIGHT` deletes the track under the cursor and its connection group. `Button.MIDDLE` requests a connection.
  - `drag(x, y)`: moves the selected point.
  - `release()`: returns the action taken, one of `"n"`, `"a"`, `"m"`, `"d"` or `"c"`.
- `PointEditor` listeners:
  - `update_listeners` are called after each change that needs a redraw.
  - `modified_listeners` are called on release.
  - `frame_listeners` are called when a selection follows a connection to the other side.
- Nothing happens until `image_loaded` is true.
- `to_image_coords(x, y, view_size, image_size)` maps a view position to an image pixel.

### `pixmorph.linking`

- `add_halfway_pair(parameters, start, end)` starts a left track on `frame0` and a right track on `frame1`, and selects both.
- `connect_points(parameters, matched, total_frames)` toggles the link between the two selected points. It returns:
  - `"added"` when it adds a link. Before the matching stage that is one link; with `matched=True` it is one link per frame.
  - `"removed"` when it removes the link.
  - `"unchanged"` when only one side is already linked.
  - `None` when a side has no selection.

### `pixmorph.tracking`

Frames are numpy arrays of shape `(rows, cols, 3)`. Flow fields have shape `(rows, cols, 2)`.

- `add_track(tracks, active, video, forward_flow, backward_flow, total_frames)` extends a single selected point over the whole video. It returns the new selection.
- `move_track(tracks, active, video, forward_flow, backward_flow)` propagates a track again after its selected anchor moved. Between neighbouring anchors it blends the new positions with the existing ones.
- Each propagated point is weighted by `histogram_similarity`. That function compares 10×10×10-bin colour histograms of the 6×6 patches that start 3 pixels up and left of each point, and returns the absolute value of their correlation.
- `patch_ssd` gives the sum of squared colour differences of 5×5 patches.
- `clamp_to_frame` keeps coordinates inside a frame.

### `pixmorph.project`

- `write_settings(stage, parameters)` renders `settings.xml` as text.
- `read_settings(text, parameters)` applies a settings document to `parameters` and appends the tracks it holds. It returns a `ProjectSettings` with the `stage` and the stored `videos` paths.
- `save_project(path, stage, parameters)` writes `settings.xml` into a directory.
- `load_project(path, parameters)` reads `settings.xml` from a directory. It returns `None` if the file is missing and resolves the video paths against the directory.
- `format_points` / `parse_points` and `format_connections` / `parse_connections` handle the space-separated encodings. Each track or group ends with a `-1` marker.
- `frame_filename(directory, index)` gives `frameNNN.png` paths.

### `pixmorph.controls`

- `ControlBar` holds the record, play, pause and stop states (`Status`) and a range slider from 0 to 50.
  - `enabled_controls()` lists the controls that can be used in the current state.
- `Playback` steps the preview frames back and forth.
  - `status_change` and `range_change` react to the control bar.
  - `step()` returns the frame shown and advances. While recording it also collects the frames it shows.
  - `blend_factor()` is the eased morph factor. It uses `smoothstep(t, a, b)`.

### `pixmorph.recfilter`

- Reference recursive filters on numpy arrays:
  - `forward` and `reverse` for a single sequence;
  - `forward_rows`, `reverse_rows`, `forward_columns` and `reverse_columns` for blocks.
- Block slicing helpers: `head`, `tail`, `head_rows` and `tail_rows`.
- `BorderType` lists the border modes. No function here applies them.

## Example

```python
from pixmorph.model import ControlPoint, Parameters
from pixmorph.project import read_settings, write_settings
from pixmorph.linking import connect_points

params = Parameters()
params.lp.append([ControlPoint(10, 20, 0)])
params.rp.append([ControlPoint(12, 21, 0)])
params.active_l = (0, 0)
params.active_r = (0, 0)
print(connect_points(params, matched=False, total_frames=1))  # added

text = write_settings(1, params)
restored = Parameters()
settings = read_settings(text, restored)
print(settings.stage, restored.lp[0][0], len(restored.cnt))
```

## What it does not do

pixmorph does not do any of the following:

- decode or encode video;
- compute optical flow;
- build image pyramids;
- run the synchronisation or matching optimisation;
- render morphed frames.

Flows and frames must be supplied as numpy arrays. `save_project` writes only `settings.xml`; it writes no frame images or video files. There is no graphical interface and no command to run.