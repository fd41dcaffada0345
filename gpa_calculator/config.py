"""
Configuration constants for the GPA calculator.

Grades live on the 20-point scale; a course or an overall average passes
at 10/20.
"""

import logging
import os

# ------------------------
# Grade scale
# ------------------------
GRADE_MIN = 0.0
GRADE_MAX = 20.0
PASS_MARK = 10.0

# New courses count once in the average until the user says otherwise
DEFAULT_COEFFICIENT = 1.0

# ------------------------
# Display
# ------------------------
DISPLAY_DECIMALS = 2

# ------------------------
# Logging
# ------------------------
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(name: str) -> str:
    level = name.strip().upper()
    # getLevelName maps known names to their number and anything else to a "Level x" string
    if isinstance(logging.getLevelName(level), int):
        return level
    return DEFAULT_LOG_LEVEL


LOG_LEVEL = resolve_log_level(os.getenv("GPA_CALCULATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL))
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
