"""
GPA calculator for the 20-point grading scale.

Each course is graded from its exam, TD and TP scores according to its
course type, then all courses are averaged with their coefficients as
weights. A course or an overall average passes at 10/20.

    from gpa_calculator import calculate_gpa, generate_new_course

    course = generate_new_course()
    result = calculate_gpa([course])
"""

__version__ = "1.0.0"

from .backend_logic import (
    COURSE_WEIGHTS,
    Course,
    CourseResult,
    CourseType,
    GpaCalculatorError,
    GpaResult,
    InvalidCourseDataError,
    UnknownCourseTypeError,
    calculate_course_grade,
    calculate_gpa,
    format_grade,
    generate_new_course,
    round_half_up,
)

__all__ = [
    "__version__",
    "COURSE_WEIGHTS",
    "Course",
    "CourseResult",
    "CourseType",
    "GpaCalculatorError",
    "GpaResult",
    "InvalidCourseDataError",
    "UnknownCourseTypeError",
    "calculate_course_grade",
    "calculate_gpa",
    "format_grade",
    "generate_new_course",
    "round_half_up",
]
