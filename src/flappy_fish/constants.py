"""
constants.py: Centralized configuration for both game variants and the client.
"""

# -------- Window & Client Config --------
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
RENDER_FPS = 60
MAX_FRAME_TIME = 0.25           # Clamp for long stalls (window drag, breakpoints)
FISH_HIGH_SCORE_FILE = "flappy_fish_highscore.txt"
BIRD_HIGH_SCORE_FILE = "flappy_bird_highscore.txt"
MUSIC_FILE = "src/background.wav"
HIT_SOUND_FILE = "src/hit.wav"

# -------- Shared Visuals --------
MAX_TILT = 40.0                 # Degrees

# ======== 3D Flappy Fish (world units, y up) ========
FISH_X = -5.0                   # Fixed fish x position
FISH_SPAWN_Y = 4.0
FISH_RADIUS = 0.4
FISH_GRAVITY = -8.0             # units/s^2
FISH_JUMP = 6.5                 # Velocity set by a flap (units/s)
FISH_TILT_FACTOR = 6.0          # Degrees of tilt per unit/s

FISH_FLOOR = 0.0
FISH_CEILING = 15.5

MAX_OBSTACLES = 6
OBSTACLE_RADIUS = 0.8
OBSTACLE_SPACING = 20.0
OBSTACLE_FIRST_OFFSET = 10.0    # Distance in front of the fish for obstacle 0
OBSTACLE_DESPAWN_OFFSET = 12.0  # Distance behind the fish before recycling
OBSTACLE_HEIGHT = 12.0          # Drawn column height
GAP_FLOOR_Y = 1.0               # Lowest gap edge before the fish margin
GAP_CEILING_Y = 8.5             # Highest gap edge before the fish margin

# Collision forgiveness
COLLISION_SLOP = 1.0
MIN_COLLISION_THRESHOLD = 0.05
FALLBACK_THRESHOLD_SCALE = 0.20
VERTICAL_TOLERANCE = 0.15

# Difficulty
GAP_SIZE = 6.5
MIN_GAP_SIZE = 4.0
FISH_SPEED = 4.0                # Base obstacle speed (units/s)
DIFFICULTY_INTERVAL = 120.0     # Seconds between difficulty steps
SPEED_INCREMENT = 1.5
GAP_DECREMENT = 0.3

# Idle animation on the start screen
FISH_BOB_AMPLITUDE = 0.3
FISH_BOB_RATE = 2.0

# ======== 2D Flappy Bird (pixels, y down) ========
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 800
BIRD_X = 100                    # Fixed bird x position
BIRD_SIZE = 36
BIRD_SPAWN_Y = SCREEN_HEIGHT // 2
BIRD_HITBOX_INSET = 4           # Forgiveness per side

# Physics (pixels / second / second)
GRAVITY_ACCEL = 1800.0
JUMP_IMPULSE = -600.0
MAX_FALL_VELOCITY = 1000.0
BIRD_TILT_FACTOR = 0.08

# Pipes
MAX_PIPES = 5
START_PIPES = 3
PIPE_WIDTH = 80
PIPE_GAP = 200
MIN_PIPE_GAP = 130
PIPE_SPACING = 260
PIPE_MARGIN = 60                # Keeps each gap away from the screen edges
PIPE_TOLERANCE = 4
PIPE_SPEED_PPS = 250.0

# Difficulty & scoring
PIPE_DIFFICULTY_INTERVAL = 20.0
PIPE_SPEED_INCREMENT = 25.0
PIPE_GAP_DECREMENT = 15.0
SCORE_MULTIPLIER_INTERVAL = 30.0
MAX_SCORE_MULTIPLIER = 5

BIRD_BOB_AMPLITUDE = 8.0
BIRD_BOB_RATE = 3.0

# -------- Fish Camera (side view of the z = 0 plane) --------
CAMERA_DISTANCE = 12.0
CAMERA_FOVY = 60.0
BUBBLE_COUNT = 150
