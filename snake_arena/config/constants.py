"""Centralized default constants for the snake simulation.

All magic numbers that appear across multiple modules are defined here.
``GameSettings`` copies these as field defaults; consuming modules should
read the settings value rather than importing these directly.
"""

from __future__ import annotations

BASE_WIDTH = 40
"""Board width at level 1, in cells."""

BASE_HEIGHT = 40
"""Board height at level 1, in cells."""

LEVEL_SIZE_INCREMENT = 5
"""Board growth per level along each axis."""

INITIAL_SNAKE_LENGTH = 5
"""Segment count of a freshly spawned snake."""

HUNGER_THRESHOLD = 15
"""Ticks without food before a snake loses a tail segment."""

MIN_SNAKE_LENGTH = 2
"""A snake shorter than this after trimming starves."""

FOOD_YOUNG_AGE = 5
"""Food younger than this many ticks is in the young phase."""

FOOD_ADULT_AGE = 15
"""Food younger than this (and not young) is adult; older food is old."""

FOOD_MAX_AGE = 120
"""Food is purged once its age reaches this value."""

FOOD_MIN_DISTANCE = 2
"""Minimum Chebyshev distance between two food items."""

REPRODUCTION_MIN_COOLDOWN = 5
"""Ticks on the reproduction clock before an adult may reproduce."""

REPRODUCTION_PROBABILITY_BASE = 0.05
"""Reproduction probability per accumulated cooldown tick."""

MAX_REPRODUCTIONS = 5
"""Lifetime reproduction cap per food item."""

NEIGHBOR_REPRODUCTION_RADIUS = 2
"""Chebyshev radius used to count crowding neighbors."""

NEIGHBOR_REPRODUCTION_PENALTY = 0.25
"""Probability reduction per crowding neighbor."""

MAX_REPRODUCTION_NEIGHBORS = 4
"""Neighbor count at which reproduction is suppressed entirely."""

ADULT_APPLE_POINTS = 2
"""Points awarded for an adult apple (all other food awards 1)."""

ADULT_APPLE_GROWTH = 1
"""Segments gained for an adult apple (all other food grows by 1)."""

RABBIT_FROM_LEVEL = 111
"""First level at which spawned food is rabbit-kind instead of apple-kind."""

FOOD_COUNT_PER_SNAKE_COEFF = 1.5
FOOD_COUNT_BASE = 10.0

WALL_CLUSTER_COEFF = 1.2
WALL_CLUSTER_BASE = 2.0
WALL_LENGTH_COEFF = 1.2
WALL_LENGTH_BASE = 3.0

WALL_BRANCH_PROBABILITY = 0.3
"""Per-step probability that a wall random walk drops a branch cell."""

WALL_MAX_ATTEMPTS = 50
"""Wall layouts tried before falling back to an empty wall set."""

WALL_SAFETY_RADIUS_FACTOR = 1.5
"""Exclusion radius around spawn cells, as a multiple of initial length."""

SPAWN_ATTEMPTS_PER_ITEM = 100
"""Random placement attempts budgeted per requested food item."""

TARGET_SCORE_COEFF = 1.2
TARGET_SCORE_BASE = 10.0

LEVEL_TIME_LIMIT = 180
"""Multi-snake level countdown, in seconds."""

TICK_INTERVAL_MS = 150
"""Wall-clock duration of one tick for the external scheduler."""

VISION_SIZE = 20
"""Side length of the square bot vision matrix."""

OBSTACLE_SIGNAL_CLOSE = -100
OBSTACLE_SIGNAL_DECAY = 20
OBSTACLE_SIGNAL_CAP = -5
FOOD_SIGNAL_CLOSE = 100
FOOD_SIGNAL_DECAY = 20
FOOD_SIGNAL_MIN = 5

MAX_START_SLOTS = 6
"""Number of predefined snake start slots on a board."""

DEFAULT_ALGORITHM_ID = "wise"
"""Algorithm used when a participant names none or an unknown one."""
