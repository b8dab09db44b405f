# utils.py

import re
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import plotly.graph_objects as go

from engine import SimulationResult, Step

_VALID_INPUT = re.compile(r"^[0-9,\s]+$")

NEW_PAGE_COLOR = "#f8d7da"
HIT_PAGE_COLOR = "#d4edda"
EMPTY_COLOR = "#f0f0f0"
RESIDENT_COLOR = "#ffffff"

# Cell kinds, also the heatmap z values
EMPTY_CELL, RESIDENT_CELL, HIT_CELL, NEW_CELL = range(4)
CELL_COLORS = (EMPTY_COLOR, RESIDENT_COLOR, HIT_PAGE_COLOR, NEW_PAGE_COLOR)


class MalformedReferenceError(ValueError):
    """Raised when a reference string contains anything but digits, commas and whitespace."""


def parse_reference_string(text: str) -> List[int]:
    """Turn "1, 2,3" into [1, 2, 3]. Blank tokens are skipped."""
    if not text or not _VALID_INPUT.match(text):
        raise MalformedReferenceError(
            "Please enter a valid reference string (comma-separated numbers)")

    pages = []
    for token in text.split(","):
        token = token.strip()
        if token == "":
            continue
        if not token.isdigit():
            # "1 2" inside one token: whitespace is only allowed around commas
            raise MalformedReferenceError(f"Invalid page reference: {token!r}")
        pages.append(int(token))

    if not pages:
        raise MalformedReferenceError("Reference string cannot be empty")
    return pages


def format_ratio(value: float) -> str:
    return f"{value:.2f}"


def cell_kind(frame: Optional[int], step: Step) -> int:
    """Classify one frame cell of a step: empty, resident, hit or newly loaded."""
    if frame is None:
        return EMPTY_CELL
    if frame == step.page:
        return NEW_CELL if step.fault else HIT_CELL
    return RESIDENT_CELL


def cell_color(frame: Optional[int], step: Step) -> str:
    return CELL_COLORS[cell_kind(frame, step)]


def step_rows(result: SimulationResult, limit: Optional[int] = None) -> List[Dict[str, object]]:
    """Rows of the frame-by-frame table, optionally only the first `limit` steps."""
    steps = result.steps if limit is None else result.steps[:limit]
    rows = []
    for step in steps:
        row: Dict[str, object] = {"Step": step.index + 1, "Page": step.page}
        for i, frame in enumerate(step.frames):
            row[f"Frame {i + 1}"] = "-" if frame is None else frame
        row["Status"] = "Hit" if step.hit else "Miss"
        row["Replaced"] = "-" if step.replaced is None else step.replaced
        rows.append(row)
    return rows


# --------------------------------------
# Playback
# --------------------------------------
@dataclass
class Playback:
    """
    Cursor over precomputed steps for step-by-step reveal.

    The caller advances it on a timer; stopping is just not advancing.
    """
    total: int
    cursor: int = 0

    @property
    def done(self) -> bool:
        return self.cursor >= self.total

    def advance(self) -> int:
        if not self.done:
            self.cursor += 1
        return self.cursor

    def visible(self, steps: Sequence[Step]) -> Sequence[Step]:
        return steps[:self.cursor]


# --------------------------------------
# Figures
# --------------------------------------
def stats_figure(result: SimulationResult) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=["Hits", "Faults"],
        y=[result.hit_count, result.fault_count],
        marker_color=[HIT_PAGE_COLOR, NEW_PAGE_COLOR],
    ))
    fig.update_layout(height=300, title="Hits vs Faults")
    return fig


def frames_figure(result: SimulationResult, limit: Optional[int] = None) -> go.Figure:
    """
    Heatmap of frame occupancy: one column per step, one row per frame.

    Cell values are the cell_kind codes, colored with CELL_COLORS.
    """
    steps = result.steps if limit is None else result.steps[:limit]
    z: List[List[int]] = [[] for _ in range(result.frame_count)]
    text: List[List[str]] = [[] for _ in range(result.frame_count)]

    for step in steps:
        for slot, frame in enumerate(step.frames):
            z[slot].append(cell_kind(frame, step))
            text[slot].append("-" if frame is None else str(frame))

    # one flat band per kind
    band = 1.0 / len(CELL_COLORS)
    colorscale = []
    for kind, color in enumerate(CELL_COLORS):
        colorscale.append([kind * band, color])
        colorscale.append([(kind + 1) * band, color])
    fig = go.Figure(go.Heatmap(
        z=z,
        x=[f"{s.index + 1}: P{s.page}" for s in steps],
        y=[f"Frame {i + 1}" for i in range(result.frame_count)],
        text=text,
        texttemplate="%{text}",
        colorscale=colorscale,
        zmin=0,
        zmax=len(CELL_COLORS) - 1,
        showscale=False,
        xgap=2,
        ygap=2,
    ))
    fig.update_layout(
        height=80 + 40 * result.frame_count,
        yaxis=dict(autorange="reversed"),
        margin=dict(t=20, b=20),
    )
    return fig


def comparison_figure(results: Mapping[str, SimulationResult]) -> go.Figure:
    policies = list(results)
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Faults", x=policies, y=[results[p].fault_count for p in policies],
                         marker_color=NEW_PAGE_COLOR))
    fig.add_trace(go.Bar(name="Hits", x=policies, y=[results[p].hit_count for p in policies],
                         marker_color=HIT_PAGE_COLOR))
    fig.update_layout(height=300, barmode="group", title="Policy Comparison")
    return fig


def fault_curve_figure(curves: Mapping[str, Sequence[Tuple[int, int]]]) -> go.Figure:
    fig = go.Figure()
    for policy, points in curves.items():
        fig.add_trace(go.Scatter(
            x=[n for n, _ in points],
            y=[faults for _, faults in points],
            mode="lines+markers",
            name=policy,
        ))
    fig.update_layout(
        height=300,
        title="Page Faults vs Number of Frames",
        xaxis=dict(title="Frames", dtick=1),
        yaxis=dict(title="Page Faults"),
    )
    return fig
