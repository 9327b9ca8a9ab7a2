"""
Shared names and run defaults for the census-style training experiment.
"""

INTERCEPT_COLUMN = "intercept"
ONE_HOT_SEPARATOR = "_"
FIELD_SEPARATOR = r", *"
NUMERIC_CHARS = frozenset("0123456789.-")

DEFAULT_TRAIN_FRACTION = 0.7
# Works well on the census data; larger steps overshoot with unscaled sums.
DEFAULT_STEP_SIZE = 0.001
DEFAULT_ITERATIONS = 500
DEFAULT_REPORT_EVERY = 20
DECISION_THRESHOLD = 0.5
