"""Planning constants.

Experience adjustments, fallback tables, rep schemes and duration
thresholds used across the planning stages.
"""

from liftplan.planner.enums import ExperienceLevel, FitnessGoal

MAX_MUSCLE_GROUPS = 4
MIN_TOTAL_EXERCISES = 4
MAX_TOTAL_EXERCISES = 12
MIN_EXERCISES_PER_MUSCLE = 1
MAX_EXERCISES_PER_MUSCLE = 4
MAX_FLEXIBILITY_EXERCISES = 3
MAX_PERCENT_ONE_REP_MAX = 100

# (lower_delta, upper_delta) per range
EXPERIENCE_RANGE_ADJUSTMENTS: dict[ExperienceLevel, dict[str, tuple[int, int]]] = {
    ExperienceLevel.BEGINNER: {
        "percent_one_rep_max": (-5, -10),
        "rep_range": (2, 4),
        "sets_per_exercise": (0, -1),
        "rest_between_sets_seconds": (0, 10),
    },
    ExperienceLevel.INTERMEDIATE: {},
    ExperienceLevel.ADVANCED: {
        "percent_one_rep_max": (5, 15),
        "rep_range": (-1, -3),
        "sets_per_exercise": (0, 2),
        "rest_between_sets_seconds": (-10, -20),
    },
}

# (compound_setup_delta, isolation_setup_delta, transition_delta)
EXPERIENCE_OVERHEAD_ADJUSTMENTS: dict[ExperienceLevel, tuple[int, int, int]] = {
    ExperienceLevel.BEGINNER: (10, 5, 5),
    ExperienceLevel.INTERMEDIATE: (0, 0, 0),
    ExperienceLevel.ADVANCED: (0, 0, -5),
}
MIN_TRANSITION_SECONDS = 5

GOAL_FALLBACK_MUSCLE_GROUPS: dict[FitnessGoal, list[str]] = {
    FitnessGoal.STRENGTH: ["Chest", "Back", "Shoulders", "Quadriceps", "Glutes"],
    FitnessGoal.POWERLIFTING: ["Chest", "Back", "Shoulders", "Quadriceps", "Glutes"],
    FitnessGoal.HYPERTROPHY: ["Chest", "Back", "Shoulders", "Biceps", "Triceps"],
    FitnessGoal.ENDURANCE: ["Chest", "Back", "Quadriceps", "Abs"],
}
DEFAULT_FALLBACK_MUSCLE_GROUPS = ["Chest", "Back", "Shoulders", "Quadriceps"]
MIN_RECOVERY_MUSCLE_GROUPS = 3

COMPOUND_KEYWORDS = ("squat", "deadlift", "press", "row", "pull", "clean", "snatch", "lunge")

# Rep values prescribed in practice; nothing else is ever emitted
CONVENTIONAL_REP_COUNTS = (1, 2, 3, 4, 5, 6, 8, 10, 12, 15, 20, 25, 30)

# goal rep range -> (compound choices, isolation choices)
CONVENTIONAL_REP_SCHEMES: dict[tuple[int, int], tuple[tuple[int, ...], tuple[int, ...]]] = {
    (1, 6): ((3, 4, 5), (4, 5, 6)),
    (6, 12): ((6, 8), (8, 10, 12)),
    (12, 15): ((12, 15), (12, 15)),
    (15, 25): ((15, 20, 25), (15, 20, 25)),
}

# Warm-up step function: (max duration minutes inclusive, seconds)
WARMUP_STEPS: tuple[tuple[int, int], ...] = ((30, 180), (60, 300), (90, 420))
WARMUP_SECONDS_LONG = 600

REST_EFFICIENCY_FACTOR = 0.5
SHORT_WORKOUT_MAX_MINUTES = 46
SHORT_WORKOUT_REST_FACTOR = 0.85

COMPOUND_REST_PERCENTILE = 0.50
ISOLATION_REST_PERCENTILE = 0.25

# Rest scale by session duration: (exclusive max minutes, factor)
REST_DURATION_FACTORS: tuple[tuple[int, float], ...] = ((35, 0.70), (50, 0.85), (65, 0.95))

TIME_BUFFER_FRACTION = 0.03
