"""
Animation Configuration Settings

All configuration constants for keyframe evaluation and transform composition.
Modify these values to change evaluation behavior.
"""

from pathlib import Path

# ============================================================================
# Project Paths
# ============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
RIGS_DIR = ASSETS_DIR / "rigs"

# ============================================================================
# Channel Scales
# ============================================================================

# Opacity and scale channels are authored as percentages
OPACITY_PERCENT_SCALE = 0.01
SCALE_PERCENT_SCALE = 0.01

# ============================================================================
# Channel Defaults (used when a descriptor omits a channel)
# ============================================================================

DEFAULT_ANCHOR_POINT = (0.0, 0.0, 0.0)
DEFAULT_SCALE = (100.0, 100.0, 100.0)
DEFAULT_ROTATION = 0.0
DEFAULT_OPACITY = 100.0
DEFAULT_ORIENTATION = (0.0, 0.0, 0.0)

# Fill for the missing Z of two-component vectors, per channel kind
POSITION_Z_FILL = 0.0
SCALE_Z_FILL = 100.0

# ============================================================================
# Easing Curve Solver
# ============================================================================

BEZIER_NEWTON_ITERATIONS = 8    # Newton-Raphson steps before falling back to bisection
BEZIER_BISECTION_ITERATIONS = 32
BEZIER_EPSILON = 1e-7            # Accepted error on the x-axis
BEZIER_MIN_SLOPE = 1e-6          # Below this derivative Newton is abandoned
