# src/plotcall/pipeline/command.py
"""
Command generator: render the textual plot command from resolved chunks.

Layout of the rendered text (one directive per line):

    set title "..."            <- plot options, fixed order
    set ytics nomirror         <- only if some curve uses the y2 axis
    set y2tics
    plot '-' title "a" with lines, '-' notitle with points axes x1y2

Rendering is pure: the same plan always yields the same text.
"""
from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

from plotcall.errors import UnsupportedStyleError
from .chunks import Chunk
from .tuplesize import uses_secondary_axis

if TYPE_CHECKING:
    from .plan import PlotPlan

__all__ = [
    "DATA_PLACEHOLDER",
    "quote",
    "render_plot_directives",
    "render_clause",
    "render_command",
    "render_plan",
]

DATA_PLACEHOLDER = "'-'"


def quote(text: str) -> str:
    escaped = str(text).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _num(v: Optional[float]) -> str:
    return "*" if v is None else repr(float(v))


def _set_text(name: str) -> Callable[[Any], str]:
    return lambda v: f"set {name} {quote(v)}"


def _set_range(name: str) -> Callable[[Any], str]:
    return lambda v: f"set {name} [{_num(v[0])}:{_num(v[1])}]"


def _grid(v: Any) -> str:
    return "set grid" if v else "unset grid"


def _key(v: Any) -> str:
    if isinstance(v, str):
        return f"set key {v}"
    return "set key" if v else "unset key"


# Emission order for plot options; options not listed here produce no text.
_DIRECTIVES: Tuple[Tuple[str, Callable[[Any], str]], ...] = (
    ("title", _set_text("title")),
    ("xlabel", _set_text("xlabel")),
    ("ylabel", _set_text("ylabel")),
    ("y2label", _set_text("y2label")),
    ("zlabel", _set_text("zlabel")),
    ("xrange", _set_range("xrange")),
    ("yrange", _set_range("yrange")),
    ("y2range", _set_range("y2range")),
    ("zrange", _set_range("zrange")),
    ("logscale", lambda v: f"set logscale {v}"),
    ("grid", _grid),
    ("key", _key),
)


def render_plot_directives(plot_options: Mapping[str, Any]) -> List[str]:
    return [emit(plot_options[name]) for name, emit in _DIRECTIVES if name in plot_options]


def render_clause(snapshot: Mapping[str, Any]) -> str:
    """One curve's clause: data placeholder, title, style, smoothing, axes."""
    parts = [DATA_PLACEHOLDER]
    legend = snapshot.get("legend")
    if legend:
        parts.append(f"title {quote(legend[0])}")
    else:
        parts.append("notitle")
    parts.append("with " + " ".join(snapshot["with"]))
    if "smooth" in snapshot:
        parts.append(f"smooth {snapshot['smooth']}")
    if "axes" in snapshot:
        parts.append(f"axes {snapshot['axes']}")
    elif snapshot.get("y2"):
        parts.append("axes x1y2")
    return " ".join(parts)


def render_command(
    chunks: Sequence[Chunk],
    *,
    is_3d: bool,
    plot_options: Mapping[str, Any] | None = None,
) -> str:
    """Render the full command for resolved chunks, in chunk then curve order."""
    lines = render_plot_directives(plot_options or {})

    if any(uses_secondary_axis(snap) for chunk in chunks for snap in chunk.options):
        if is_3d:
            raise UnsupportedStyleError("y2", mode="3D", detail="secondary y axis is undefined in 3D plots")
        lines.extend(["set ytics nomirror", "set y2tics"])

    clauses = [render_clause(snap) for chunk in chunks for snap in chunk.options]
    lines.append(("splot " if is_3d else "plot ") + ", ".join(clauses))
    return "\n".join(lines)


def render_plan(plan: "PlotPlan") -> str:
    return render_command(plan.chunks, is_3d=plan.is_3d, plot_options=plan.plot_options)
