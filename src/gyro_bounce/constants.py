"""
constants.py: Centralized tuning values for the simulation and the client.
"""

# -------- Screen Config --------
SCREEN_WIDTH = 420
SCREEN_HEIGHT = 800

# Time step
MAX_DT = 0.033                  # Clamp for slow frames (seconds)
RENDER_FPS = 60

# -------- Ball & Platform Config --------
BALL_RADIUS = 16
PLATFORM_HEIGHT = 16
PLATFORM_BOTTOM_OFFSET = 200    # Platform top sits this far above the bottom edge
BALL_DROP_HEIGHT = 300          # Spawn height above the platform

# -------- Motion Config (Pixels / Second) --------
ACCEL_SENSITIVITY = 1000.0      # Platform speed per unit of tilt
ACCEL_UPDATE_MS = 10            # Tilt sampling interval
SIDE_FRICTION = 0.85            # Kept fraction of vx after a side wall bounce
PLATFORM_DRIVE_TRANSFER = 0.35  # Share of platform drive handed to the ball
PLATFORM_SNAP_GAP = 0.01
PLATFORM_JITTER = 15.0          # Max horizontal kick on a platform bounce
OBSTACLE_JITTER = 10.0          # Max kick per axis on an obstacle bounce

# -------- Obstacle Generation --------
OBSTACLE_WIDTH_RANGE = (60.0, 120.0)
OBSTACLE_HEIGHT_RANGE = (12.0, 20.0)
OBSTACLE_TOP_MARGIN = 120.0
OBSTACLE_PLATFORM_CLEARANCE = 80.0
OBSTACLE_SIDE_MARGIN = 10.0
OBSTACLE_MIN_RANGE = 40.0
OBSTACLE_SPEED_FACTOR = (0.7, 1.2)

# -------- Persistence --------
HIGH_SCORE_BASE_KEY = "gyro_bounce_highscore_v1"
DB_FILE = "gyro_bounce.db"
