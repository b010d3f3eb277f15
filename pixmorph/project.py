"""Reading and writing the ``settings.xml`` file of a morphing project."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from .model import BoundaryCondition, Connection, ControlPoint, Parameters

SETTINGS_FILE = "settings.xml"
VIDEO_NAMES = ("video1", "video2", "resample1", "resample2")
_TERMINATOR = -1
_POINT_FIELDS = 5
_CONNECTION_FIELDS = 4


@dataclass
class ProjectSettings:
    """What a settings file says beyond the editing parameters.

    ``stage`` is the pipeline stage the project was saved in; ``videos`` maps
    each of the four video names to the path stored for it.
    """

    stage: int = -1
    videos: dict[str, str] = field(default_factory=dict)


def _to_int(text: str | None) -> int:
    """Integer value of ``text``; empty or malformed text reads as 0."""
    try:
        return int(text or "")
    except ValueError:
        return 0


def _to_float(text: str | None) -> float:
    """Float value of ``text``; empty or malformed text reads as 0."""
    try:
        return float(text or "")
    except ValueError:
        return 0.0


def _groups(text: str, size: int) -> list[list[str]]:
    tokens = text.split()
    if len(tokens) % size:
        raise ValueError(
            f"expected groups of {size} values, got {len(tokens)} values in total"
        )
    return [tokens[i:i + size] for i in range(0, len(tokens), size)]


def format_points(tracks: list[list[ControlPoint]]) -> str:
    """Serialise tracks as space-separated values, each track ended by a -1 marker."""
    parts: list[str] = []
    for track in tracks:
        for point in track:
            parts.append(f"{int(point.x)} {int(point.y)} {int(point.z)} {int(point.w)} {point.weight:f} ")
        parts.append(f"{_TERMINATOR} {_TERMINATOR} {_TERMINATOR} {_TERMINATOR} {float(_TERMINATOR):f} ")
    return "".join(parts)


def parse_points(text: str) -> list[list[ControlPoint]]:
    """Read tracks written by :func:`format_points`.

    A track that is not closed by a marker is dropped.
    """
    tracks: list[list[ControlPoint]] = []
    current: list[ControlPoint] = []
    for x, y, z, w, weight in _groups(text, _POINT_FIELDS):
        values = (_to_int(x), _to_int(y), _to_int(z), _to_int(w))
        if all(v == _TERMINATOR for v in values):
            tracks.append(current)
            current = []
        else:
            current.append(ControlPoint(*values, weight=_to_float(weight)))
    return tracks


def format_connections(groups: list[list[Connection]]) -> str:
    """Serialise connection groups, each group ended by a -1 marker."""
    parts: list[str] = []
    for group in groups:
        for link in group:
            parts.append(
                f"{int(link.left[0])} {int(link.left[1])} "
                f"{int(link.right[0])} {int(link.right[1])} "
            )
        parts.append(f"{_TERMINATOR} {_TERMINATOR} {_TERMINATOR} {_TERMINATOR} ")
    return "".join(parts)


def parse_connections(text: str) -> list[list[Connection]]:
    """Read connection groups written by :func:`format_connections`."""
    groups: list[list[Connection]] = []
    current: list[Connection] = []
    for tokens in _groups(text, _CONNECTION_FIELDS):
        lx, ly, rx, ry = (_to_int(t) for t in tokens)
        if lx == ly == rx == ry == _TERMINATOR:
            groups.append(current)
            current = []
        else:
            current.append(Connection((lx, ly), (rx, ry)))
    return groups


def _anchor_count(parameters: Parameters) -> int:
    return sum(
        1
        for tracks in (parameters.lp, parameters.rp)
        for track in tracks
        for point in track
        if point.w == 1
    )


def write_settings(stage: int, parameters: Parameters) -> str:
    """Render the settings document for ``stage`` and ``parameters``."""
    root = ET.Element("project")
    ET.SubElement(root, "stage", {"stage": f"{int(stage)}"})
    ET.SubElement(root, "videos", {name: f"\\{name}.mp4" for name in VIDEO_NAMES})

    para = ET.SubElement(root, "parameters")
    ET.SubElement(
        para,
        "weight",
        {
            "ssim": f"{parameters.w_ssim:f}",
            "tps": f"{parameters.w_tps:f}",
            "ui": f"{parameters.w_ui:f}",
            "temp": f"{parameters.w_temp:f}",
            "ssimclamp": f"{parameters.ssim_clamp:f}",
        },
    )
    ET.SubElement(
        para,
        "points",
        {
            "image1": format_points(parameters.lp),
            "image2": format_points(parameters.rp),
            "connection": format_connections(parameters.cnt),
            "num": f"{_anchor_count(parameters)}",
        },
    )
    ET.SubElement(para, "boundary", {"lock": f"{BoundaryCondition(parameters.bcond).value}"})
    ET.SubElement(
        para,
        "debug",
        {
            "iternum": f"{int(parameters.max_iter)}",
            "dropfactor": f"{parameters.max_iter_drop_factor:f}",
            "eps": f"{parameters.eps:f}",
            "startres": f"{int(parameters.start_res)}",
        },
    )
    ET.indent(root, space="    ")
    return "<?xml version='1.0'?>\n" + ET.tostring(root, encoding="unicode") + "\n"


def _read_parameters(element: ET.Element, parameters: Parameters) -> None:
    for child in element:
        if child.tag == "weight":
            parameters.w_ssim = _to_float(child.get("ssim"))
            parameters.w_tps = _to_float(child.get("tps"))
            parameters.w_ui = _to_float(child.get("ui"))
            parameters.w_temp = _to_float(child.get("temp"))
            parameters.ssim_clamp = _to_float(child.get("ssimclamp"))
        elif child.tag == "points":
            parameters.lp.extend(parse_points(child.get("image1", "")))
            parameters.rp.extend(parse_points(child.get("image2", "")))
            parameters.cnt.extend(parse_connections(child.get("connection", "")))
        elif child.tag == "boundary":
            lock = _to_int(child.get("lock"))
            try:
                parameters.bcond = BoundaryCondition(lock)
            except ValueError:
                pass
        elif child.tag == "debug":
            parameters.max_iter = _to_int(child.get("iternum"))
            parameters.max_iter_drop_factor = _to_float(child.get("dropfactor"))
            parameters.eps = _to_float(child.get("eps"))
            parameters.start_res = _to_int(child.get("startres"))


def read_settings(text: str, parameters: Parameters) -> ProjectSettings:
    """Apply a settings document to ``parameters``; tracks are appended.

    Returns the stage and the stored video paths.
    """
    root = ET.fromstring(text)
    settings = ProjectSettings()
    for child in root:
        if child.tag == "stage":
            settings.stage = _to_int(child.get("stage"))
        elif child.tag == "videos":
            settings.videos = {name: child.get(name, "") for name in VIDEO_NAMES}
        elif child.tag == "parameters":
            _read_parameters(child, parameters)
    return settings


def frame_filename(directory, index: int) -> Path:
    """Path of the numbered PNG frame ``index`` inside ``directory``."""
    if index < 0:
        raise ValueError("frame index must not be negative")
    return Path(directory) / f"frame{index:03d}.png"


def save_project(path, stage: int, parameters: Parameters) -> Path:
    """Write the settings file into the project directory ``path``."""
    target = Path(path) / SETTINGS_FILE
    target.write_text(write_settings(stage, parameters), encoding="utf-8")
    return target


def load_project(path, parameters: Parameters) -> ProjectSettings | None:
    """Read the settings of the project at ``path`` into ``parameters``.

    Returns ``None`` when the directory holds no settings file.  Video paths
    in the result are resolved against the project directory.
    """
    root = Path(path)
    source = root / SETTINGS_FILE
    if not source.is_file():
        return None
    settings = read_settings(source.read_text(encoding="utf-8"), parameters)
    settings.videos = {
        name: str(root / stored.lstrip("\\/").replace("\\", "/"))
        for name, stored in settings.videos.items()
    }
    return settings