"""Control-point model, editing, linking, track propagation, project settings and playback logic for video morphing."""

__version__ = "0.1.0"
__all__ = ["model", "recfilter", "controls", "project", "editing", "linking", "tracking"]