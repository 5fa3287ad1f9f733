"""Fishing encounter tuning constants.

Durations are in seconds, rates per second. Every phase clamps its inputs to
the matching minimum on construction.
"""

# =============================================================================
# CAST AND DRIFT
# =============================================================================
CAST_DURATION = 0.5
CAST_DURATION_MIN = 0.1
CAST_MIN_DISTANCE = 2.0
CAST_MAX_DISTANCE = 8.0

DRIFT_VELOCITY_THRESHOLD = 0.1
DRIFT_VELOCITY_THRESHOLD_MIN = 0.01
DRIFT_MIN_TIME = 0.5

# =============================================================================
# WAITING FOR A BITE
# =============================================================================
STILLNESS_THRESHOLD = 3.0
STILLNESS_THRESHOLD_MIN = 0.1

MICRO_TWITCH_DURATION = 0.2
MICRO_TWITCH_DURATION_MIN = 0.05

BITE_BASE_PROBABILITY = 0.5
BITE_CHECK_DURATION = 0.3
BITE_CHECK_DURATION_MIN = 0.1
BITE_NO_BITE_RETURN_CHANCE = 0.5  # Chance to go back to Stillness instead of Idle
BITE_TIMEOUT = 2.0

# =============================================================================
# HOOKING
# =============================================================================
HOOK_WINDOW_DURATION = 0.8
HOOK_WINDOW_DURATION_MIN = 0.1
HOOK_EARLY_PENALTY_WINDOW = 0.1  # Capped at half the window

HOOK_SET_DURATION = 0.3
HOOK_SET_DURATION_MIN = 0.1

# =============================================================================
# THE FIGHT
# =============================================================================
REEL_TENSION_INCREASE_RATE = 0.5
REEL_TENSION_DECREASE_RATE = 0.3
REEL_TENSION_RATE_MIN = 0.1
REEL_MAX_TENSION = 1.0
REEL_MAX_TENSION_MIN = 0.1
REEL_START_TENSION_RATIO = 0.3
REEL_PROGRESS_PER_SECOND = 0.2
REEL_PROGRESS_PER_SECOND_MIN = 0.01
REEL_SLACK_CHANCE = 0.15
REEL_SLACK_CHECK_INTERVAL = 2.0
REEL_SLACK_CHECK_INTERVAL_MIN = 0.5
REEL_SLACK_SURGE_MULTIPLIER = 2.0  # Tension gain while reeling through a surge
REEL_ESCAPE_THRESHOLD = 0.1  # Capped at half of max tension

SLACK_REQUIRED_RELEASE_DURATION = 0.3
SLACK_REQUIRED_RELEASE_DURATION_MIN = 0.1
SLACK_MAX_HOLD_DURATION = 1.5
SLACK_MAX_HOLD_DURATION_MIN = 0.5

# =============================================================================
# RESULTS
# =============================================================================
CAUGHT_DISPLAY_DURATION = 2.0
LOST_DISPLAY_DURATION = 1.5
RESULT_DISPLAY_DURATION_MIN = 0.1

# =============================================================================
# FISH AND ZONES
# =============================================================================
RARE_RARITY_THRESHOLD = 0.3  # rarity_base below this counts as a rare catch
DEFAULT_RARITY = 0.5
DEFAULT_MIN_WAIT_TIME = 2.0
DEFAULT_MAX_WAIT_TIME = 8.0
DEFAULT_STRUGGLE_INTENSITY = 0.5
DEFAULT_ZONE_ID = "starting_lake"
DEFAULT_BITE_PROBABILITY_MODIFIER = 0.0
