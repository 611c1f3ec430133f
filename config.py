"""
Configuration constants for the graph traversal animator.

Pacing delays, the colour palette and logging settings live here.
Anything a deployment might want to tune is read from the environment.
"""

import os
from dataclasses import dataclass

# =============================================================================
# Pacing Configuration
# =============================================================================

# Pause after each BFS level, in milliseconds
BFS_LEVEL_DELAY_MS = 100

# Longer initial pause so the labelled source is visible before Dijkstra starts
DIJKSTRA_START_DELAY_MS = 300

# Pause after each Dijkstra relaxation round
DIJKSTRA_STEP_DELAY_MS = 100

# Pause per step while highlighting the final path
BACKTRACK_DELAY_MS = 100

# Speed presets: multiplier applied to every delay above
SPEED_PRESETS = {
    "slow":    2.0,    # teaching mode
    "normal":  1.0,
    "fast":    0.25,
    "instant": 0.0,
}

# Default preset for real-time pacing
PACING_SPEED = os.environ.get("PACING_SPEED", "normal")

# =============================================================================
# Colour Palette
# =============================================================================

@dataclass(frozen=True)
class Accent:
    light: str
    dark:  str


# BFS visitation colours
BFS_BORDER_COLOR = "#cd7ca2"
BFS_INNER_COLOR  = "#f0bbe5"
BFS_EDGE_COLOR   = "#cd7ca2"

# Dijkstra: probed edges / frontier vertices
PRIMARY_ACCENT   = Accent(light="#bde0fe", dark="#1d6fb8")

# Dijkstra: final shortest path
SECONDARY_ACCENT = Accent(light="#ffe8a3", dark="#d49b00")

# Dijkstra: finalised vertices and the explored tree
DARK_ACCENT      = Accent(light="#9aa5b1", dark="#3e4c59")

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
