#!/usr/bin/env python3
"""
Shared constants for Gravity Simulator (artificial simulation units).

The simulation does not run at a physical scale: lengths are roughly screen
pixels, and G is tuned so that orbits of a few hundred units complete in a few
seconds of simulation time. Keeping every tunable here makes scenarios and
tests easy to adjust.
"""

# Physics
DEFAULT_G = 10000.0  # scaled gravitational constant, not 6.674e-11
DEFAULT_SOFTENING = 0.0  # length units; 0 keeps the unsoftened force law

# Time stepping
DEFAULT_TIME_STEP = 0.0005
MIN_TIME_STEP = 0.0001
MAX_TIME_STEP = 0.0009
TIME_STEP_SCALE = 10000.0  # speed slider level / scale = time step
MIN_SPEED_LEVEL = 1
MAX_SPEED_LEVEL = 9
DEFAULT_SPEED_LEVEL = 5

# Path tracing
MAX_TRACE_POINTS = 200  # points kept per body trail
VIEW_UPDATE_RATE = 10  # integrator steps between trail samples
STEPS_PER_FRAME = 10  # integrator steps per rendered frame
TARGET_FPS = 60

# Rendering (viewport)
VIEW_WIDTH = 900
VIEW_HEIGHT = 700
BACKGROUND_COLOR = (0, 0, 40)
BODY_BORDER_COLOR = (192, 192, 192)
HUD_TEXT_COLOR = (200, 200, 200)
DEFAULT_BODY_COLOR = (200, 200, 255)

# Camera zoom bounds (pixels per simulation unit)
DEFAULT_PIXELS_PER_UNIT = 1.0
MIN_PIXELS_PER_UNIT = 0.01
MAX_PIXELS_PER_UNIT = 100.0

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
