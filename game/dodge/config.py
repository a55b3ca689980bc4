"""
Game constants for Triangle Dodger
"""

# Pool
MAX_ENTITIES = 100

# Difficulty
MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 10
DEFAULT_DIFFICULTY = 3

# Player
PLAYER_RADIUS = 15.0
EASING_FACTOR = 0.1

# Scoring: displayed/stored score is floor(score), one point per TICKS_PER_POINT frames
TICKS_PER_POINT = 6
SCORE_PER_TICK = 1 / TICKS_PER_POINT

# Spawning
BASE_SPAWN_INTERVAL = 70  # ticks
SPAWN_INTERVAL_STEP = 5  # ticks removed per difficulty level
MIN_SPAWN_INTERVAL = 15  # ticks
DIFFICULTY_OFFSET = 2  # difficulty 1 already plays like level 3 of the ramp
SPEED_STEP = 0.1  # speed multiplier gained per level
BIG_PROBABILITY = 0.3

# Culling margin, in multiples of the pursuer size
CULL_MARGIN = 2.0

# Per-kind pursuer parameters
KIND_CONFIG = {
    "small": {
        "size": 20.0,
        "speed_range": (1.0, 2.5),  # px/tick before difficulty scaling
        "follow_radius": 280.0,
        "turn_speed": 3.5,  # deg/tick
    },
    "big": {
        "size": 60.0,
        "speed_range": (0.5, 2.0),
        "follow_radius": 180.0,
        "turn_speed": 1.5,
    },
}

# Window defaults
GAME_CONFIG = {
    "width": 1024,
    "height": 768,
    "fps": 60,
    "title": "Triangle Dodger",
    "scores_path": "triangle_dodger_scores.json",
}
