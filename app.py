"""
Page Replacement Algorithms Simulator

This application provides an interactive simulation and visualization of the
classic page replacement algorithms used by virtual memory systems:
    - FIFO (First-In-First-Out)
    - LRU  (Least Recently Used)
    - MRU  (Most Recently Used)
    - OPT  (Optimal, Belady's algorithm)

The simulation itself lives in engine.py and computes the complete trace up
front; this module only collects input, renders the trace and replays it
step by step.

Built with Streamlit for the web interface and Plotly for visualizations.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import time                                  # For pacing the step playback

import streamlit as st                       # Web application framework

from engine import (                         # Simulation engine
    InvalidInputError,
    ReplacementPolicy,
    compare_policies,
    fault_curve,
    simulate,
)
from utils import (                          # Parsing, tables and figures
    MalformedReferenceError,
    Playback,
    comparison_figure,
    fault_curve_figure,
    format_ratio,
    frames_figure,
    parse_reference_string,
    stats_figure,
    step_rows,
)


# =============================================================================
# CONFIGURATION - Defaults
# =============================================================================

DEFAULT_REFERENCE_STRING = "1,2,3,4,1,2,5,1,2,3,4,5"
DEFAULT_FRAMES = 3
DEFAULT_POLICY = ReplacementPolicy.FIFO
DEFAULT_SPEED = 1.0          # Steps revealed per second during playback
MAX_CURVE_FRAMES = 7         # Largest frame count plotted on the fault curve
EVENT_LOG_LIMIT = 20         # Most recent event log lines shown

# Sidebar widget keys and their starting values
INPUT_DEFAULTS = {
    "reference_string": DEFAULT_REFERENCE_STRING,
    "frames": DEFAULT_FRAMES,
    "policy": DEFAULT_POLICY,
    "speed": DEFAULT_SPEED,
}


# =============================================================================
# SESSION STATE - Button Callbacks
# =============================================================================

def reset_simulation():
    """
    Restore every input to its default and drop the computed result.

    Runs as a button callback, before widgets are instantiated on the
    next rerun, so the widget keys may be overwritten here.
    """
    for key, value in INPUT_DEFAULTS.items():
        st.session_state[key] = value
    st.session_state.saved_inputs = dict(INPUT_DEFAULTS)
    st.session_state.result = None
    st.session_state.comparison = None
    st.session_state.error = None


def run_simulation():
    """
    Parse the sidebar input and compute the full trace for every view.

    Runs as a button callback. Errors are stored for display and leave
    no result behind.
    """
    st.session_state.error = None
    try:
        references = parse_reference_string(st.session_state.reference_string)
        frame_count = int(st.session_state.frames)
        result = simulate(references, frame_count, st.session_state.policy)
        comparison = compare_policies(references, frame_count)
    except (MalformedReferenceError, InvalidInputError) as e:
        st.session_state.result = None
        st.session_state.comparison = None
        st.session_state.error = str(e)
        return

    st.session_state.result = result
    st.session_state.comparison = comparison


# =============================================================================
# STREAMLIT UI - Web Application Interface
# =============================================================================

st.set_page_config(page_title="Page Replacement Simulator", layout="wide")

# Initialize state (persists across reruns). Widget keys are dropped while
# the Concepts page hides their widgets, so they come back from saved_inputs.
st.session_state.setdefault("saved_inputs", dict(INPUT_DEFAULTS))
for key, value in st.session_state.saved_inputs.items():
    st.session_state.setdefault(key, value)
for key in ("result", "comparison", "error"):
    st.session_state.setdefault(key, None)

# Page selector for switching between Simulator and Concepts views
view = st.sidebar.radio("Choose View", ["Simulator", "Concepts"], key="view")

st.title("Page Replacement Algorithms Simulator")

# =============================================================================
# CONCEPTS PAGE - Educational Content
# =============================================================================

if view == "Concepts":
    st.header("Page Replacement & Algorithms")
    st.markdown(
        """
        ### **What is Paging?**
        - Processes are divided into fixed-size blocks called *pages* and physical
          memory into *frames*.
        - Pages are loaded into any available frame; a page table records where
          each page resides.
        - When a required page is not in memory (a **page fault**) it must be loaded
          from disk, possibly replacing a resident page.

        ### **FIFO - First-In-First-Out**
        - Replaces the page that has been in memory the longest, regardless of how
          often it has been accessed.
        - **Pros:** simple to implement.
        - **Cons:** poor in some scenarios; adding frames can even *increase*
          faults (**Belady's anomaly**, try `1,2,3,4,1,2,5,1,2,3,4,5` with 3 and 4
          frames).

        ### **LRU - Least Recently Used**
        - Replaces the page that hasn't been used for the longest time.
        - Pages used recently are likely to be used again soon.
        - **Cons:** needs tracking of usage history.

        ### **MRU - Most Recently Used**
        - The opposite of LRU: replaces the most recently used page.
        - **Use case:** sequential scans where recently touched data is least
          likely to be reused soon.

        ### **OPT - Optimal**
        - Replaces the page that will not be used for the longest time in the future.
        - Gives the lowest possible number of page faults.
        - **Limitation:** requires future knowledge of the reference string, so it is
          used only for benchmarking the other algorithms.
        """
    )
    st.stop()  # Don't render the simulator on the Concepts page

# -----------------------------------------------------------------------------
# SIDEBAR - Simulation Settings
# -----------------------------------------------------------------------------

st.sidebar.header("Simulation Settings")

# Widget values come from session state (see defaults above)
st.sidebar.text_input(
    "Reference String",
    placeholder="e.g., 1,2,3,4,1,2,5,1,2,3,4,5",
    key="reference_string",
)

st.sidebar.number_input(
    "Number of Frames",
    min_value=1,
    max_value=32,
    step=1,
    key="frames",
)

st.sidebar.selectbox(
    "Algorithm",
    options=list(ReplacementPolicy.ALL),
    format_func=lambda p: ReplacementPolicy.LABELS[p],
    key="policy",
)

# Playback speed control for animation
run_speed = st.sidebar.slider(
    "Playback speed (steps/sec)",
    min_value=0.5,
    max_value=5.0,
    key="speed",
)

# Non-widget copy of the inputs, kept while the Concepts page hides them
st.session_state.saved_inputs = {key: st.session_state[key] for key in INPUT_DEFAULTS}

st.sidebar.markdown("---")

# -----------------------------------------------------------------------------
# SIDEBAR - Controls
# -----------------------------------------------------------------------------

st.sidebar.button("Run Simulation", type="primary", on_click=run_simulation, key="run")
animate_clicked = st.sidebar.button(
    "Animate",
    disabled=st.session_state.result is None,
    key="animate",
)
# Any click reruns the script, which interrupts a running playback loop
st.sidebar.button("Stop Animation", key="stop")
st.sidebar.button("Reset", on_click=reset_simulation, key="reset")

if st.session_state.error:
    st.error(st.session_state.error)

result = st.session_state.result

# =============================================================================
# RESULTS
# =============================================================================

if result is None:
    st.info("Enter a reference string and click **Run Simulation**.")
    st.stop()

# ----- Statistics -----
st.subheader(f"Simulation Results - {ReplacementPolicy.LABELS[result.policy]}")
c1, c2, c3, c4, c5 = st.columns(5)
c1.metric("Page Faults", result.fault_count)
c2.metric("Page Hits", result.hit_count)
c3.metric("Hit Ratio", format_ratio(result.hit_ratio))
c4.metric("Fault Ratio", format_ratio(result.fault_ratio))
c5.metric("Total References", result.total_references)

col1, col2 = st.columns([2, 1])

# -----------------------------------------------------------------------------
# LEFT COLUMN - Step-by-Step Visualization
# -----------------------------------------------------------------------------

with col1:
    st.subheader("Step-by-Step Visualization")
    heatmap_slot = st.empty()
    table_slot = st.empty()

    if animate_clicked:
        # Reveal a growing prefix of the precomputed steps on a fixed schedule
        playback = Playback(total=len(result.steps))
        while not playback.done:
            playback.advance()
            heatmap_slot.plotly_chart(frames_figure(result, limit=playback.cursor),
                                      use_container_width=True)
            table_slot.table(step_rows(result, limit=playback.cursor))
            time.sleep(1.0 / run_speed)
    else:
        heatmap_slot.plotly_chart(frames_figure(result), use_container_width=True)
        table_slot.table(step_rows(result))

# -----------------------------------------------------------------------------
# RIGHT COLUMN - Charts and Event Log
# -----------------------------------------------------------------------------

with col2:
    st.plotly_chart(stats_figure(result), use_container_width=True)

    if result.policy == ReplacementPolicy.FIFO:
        st.caption(f"Replacement pointer after last step: Frame {result.steps[-1].pointer + 1}")
    elif result.steps[-1].recency is not None:
        st.caption("Recency order (oldest first): "
                   + ", ".join(str(p) for p in result.steps[-1].recency))

    # Most recent events first
    st.subheader("Event Log")
    for ev in result.event_log[-EVENT_LOG_LIMIT:][::-1]:
        st.write(ev)

# =============================================================================
# COMPARISON - All Policies on the Same Input
# =============================================================================

st.markdown("---")
st.subheader("Algorithm Comparison")

comparison = st.session_state.comparison
cmp1, cmp2 = st.columns(2)

with cmp1:
    st.plotly_chart(comparison_figure(comparison), use_container_width=True)
    st.table([
        {
            "Algorithm": p,
            "Page Faults": r.fault_count,
            "Page Hits": r.hit_count,
            "Hit Ratio": format_ratio(r.hit_ratio),
        }
        for p, r in comparison.items()
    ])

with cmp2:
    curves = {
        p: fault_curve(result.references, p, MAX_CURVE_FRAMES)
        for p in ReplacementPolicy.ALL
    }
    st.plotly_chart(fault_curve_figure(curves), use_container_width=True)

# =============================================================================
# FOOTER - Usage Tips
# =============================================================================

st.markdown("---")
st.markdown(
    "**Usage tips**:\n"
    "- Enter a comma separated reference string and click **Run Simulation**.\n"
    "- Click **Animate** to replay the result one step at a time.\n"
    "- Compare FIFO with 3 and 4 frames on `1,2,3,4,1,2,5,1,2,3,4,5` to see Belady's anomaly."
)
