import uuid
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from gpa_calculator import config
from gpa_calculator.logger import get_logger

logger = get_logger(__name__)


# ------------------------
# Errors
# ------------------------
class GpaCalculatorError(Exception):
    """Base class for calculator errors."""


class UnknownCourseTypeError(GpaCalculatorError, ValueError):
    def __init__(self, course_type):
        super().__init__(f"Unrecognized course type: {course_type!r}")
        self.course_type = course_type


class InvalidCourseDataError(GpaCalculatorError, ValueError):
    """Raised when imported course data is missing fields or malformed."""


# ------------------------
# Data model
# ------------------------
class CourseType(str, Enum):
    """
    How a course is assessed.

    EXAM: final exam only
    TD_EXAM: tutorial work (TD) plus final exam
    TP_TD_EXAM: lab work (TP), tutorial work (TD) plus final exam
    """
    EXAM = "exam"
    TD_EXAM = "td_exam"
    TP_TD_EXAM = "tp_td_exam"

    @classmethod
    def parse(cls, value: Union["CourseType", str]) -> "CourseType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            logger.error("Unrecognized course type %r", value)
            raise UnknownCourseTypeError(value) from None


# Weight of each sub-score in the final grade; every row sums to 1
COURSE_WEIGHTS: Dict[CourseType, Dict[str, float]] = {
    CourseType.EXAM: {"exam": 1.0},
    CourseType.TD_EXAM: {"td": 0.4, "exam": 0.6},
    CourseType.TP_TD_EXAM: {"td": 0.2, "tp": 0.2, "exam": 0.6},
}

_missing_weights = set(CourseType) - set(COURSE_WEIGHTS)
if _missing_weights:
    raise RuntimeError(f"No weights defined for course types: {sorted(t.value for t in _missing_weights)}")


@dataclass(frozen=True)
class Course:
    """
    One course as entered by the user or loaded from a template.

    A grade of None means "not entered yet", which is not the same as 0.
    The formula still counts a missing grade as 0.
    """
    id: str
    name: str
    coefficient: float
    course_type: CourseType
    exam_grade: Optional[float] = None
    td_grade: Optional[float] = None
    tp_grade: Optional[float] = None

    def component_grades(self) -> Dict[str, Optional[float]]:
        return {"exam": self.exam_grade, "td": self.td_grade, "tp": self.tp_grade}


@dataclass(frozen=True)
class CourseResult:
    id: str
    name: str
    coefficient: float
    final_grade: float
    is_passing: bool


@dataclass(frozen=True)
class GpaResult:
    total_gpa: float
    total_coefficients: float
    is_passing: bool
    course_results: Tuple[CourseResult, ...] = ()


# ------------------------
# Core logic
# ------------------------
def is_passing_grade(grade: float) -> bool:
    return grade >= config.PASS_MARK


def calculate_course_grade(course: Course) -> float:
    """
    Final grade of one course on the 20-point scale.

    Missing sub-scores count as 0 and the weights never change, so an
    unfinished course is pulled down rather than re-weighted. Grades are
    not range-checked here.
    """
    weights = COURSE_WEIGHTS[CourseType.parse(course.course_type)]
    grades = course.component_grades()

    final_grade = 0.0
    for component, weight in weights.items():
        grade = grades[component]
        final_grade += (grade or 0.0) * weight
    return final_grade


def weighted_mean(gc: np.ndarray) -> Tuple[float, float]:
    """
    gc: Nx2 numpy array -> [grade, coefficient]
    returns: (coefficient-weighted mean grade, total coefficients)
    """
    if gc.size == 0:
        return 0.0, 0.0

    grades = gc[:, 0].astype(float)
    coefficients = gc[:, 1].astype(float)
    total_coefficients = float(coefficients.sum())
    if total_coefficients <= 0:
        return 0.0, total_coefficients

    mean = float(np.dot(grades, coefficients) / total_coefficients)
    return mean, total_coefficients


def calculate_gpa(courses: Sequence[Course]) -> GpaResult:
    """
    Weighted average of all courses, weight = coefficient.

    course_results keeps the input order. Nothing is rounded; use
    format_grade for display.
    """
    course_results: List[CourseResult] = []
    gc_rows: List[Tuple[float, float]] = []

    for course in courses:
        final_grade = calculate_course_grade(course)
        logger.debug("Course %s (%s): final grade %s", course.id, course.course_type, final_grade)

        course_results.append(
            CourseResult(
                id=course.id,
                name=course.name,
                coefficient=course.coefficient,
                final_grade=final_grade,
                is_passing=is_passing_grade(final_grade),
            )
        )
        gc_rows.append((final_grade, course.coefficient))

    gc = np.array(gc_rows, dtype=float).reshape(-1, 2)
    total_gpa, total_coefficients = weighted_mean(gc)
    logger.debug("GPA over %d courses: %s (coefficients %s)", len(course_results), total_gpa, total_coefficients)

    return GpaResult(
        total_gpa=total_gpa,
        total_coefficients=total_coefficients,
        is_passing=is_passing_grade(total_gpa),
        course_results=tuple(course_results),
    )


def new_course_id() -> str:
    return str(uuid.uuid4())


def generate_new_course(id_factory: Optional[Callable[[], str]] = None) -> Course:
    """Blank single-exam course for the 'add course' action."""
    make_id = id_factory or new_course_id
    return Course(
        id=make_id(),
        name="",
        coefficient=config.DEFAULT_COEFFICIENT,
        course_type=CourseType.EXAM,
    )


# ------------------------
# Display helpers
# ------------------------
def round_half_up(x: float, decimals: int = config.DISPLAY_DECIMALS) -> float:
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(x)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_grade(grade: float, decimals: int = config.DISPLAY_DECIMALS) -> str:
    return f"{round_half_up(grade, decimals):.{decimals}f}"
