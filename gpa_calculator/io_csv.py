from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd

from gpa_calculator import config
from gpa_calculator.backend_logic import (
    Course,
    CourseType,
    GpaResult,
    InvalidCourseDataError,
    new_course_id,
    round_half_up,
)
from gpa_calculator.logger import get_logger

logger = get_logger(__name__)

# ------------------------
# CSV helpers
# ------------------------

COLUMN_ALIASES = {
    "coef": "coefficient",
    "coefficients": "coefficient",
    "type": "course_type",
    "coursetype": "course_type",
    "examgrade": "exam_grade",
    "exam": "exam_grade",
    "tdgrade": "td_grade",
    "td": "td_grade",
    "tpgrade": "tp_grade",
    "tp": "tp_grade",
}

COURSE_COLUMNS = ["id", "name", "coefficient", "course_type", "exam_grade", "td_grade", "tp_grade"]
RESULT_COLUMNS = ["id", "name", "coefficient", "final_grade", "is_passing"]


def _normalise_cols(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df.columns = [str(c).strip().lower() for c in df.columns]
    renames = {c: COLUMN_ALIASES[c] for c in df.columns if c in COLUMN_ALIASES and COLUMN_ALIASES[c] not in df.columns}
    return df.rename(columns=renames)


def read_csv_upload(source) -> pd.DataFrame:
    # read every cell as text so ids like "007" survive; numbers are parsed per column later.
    # only empty cells are missing, a course may well be called "NA"
    df = pd.read_csv(source, dtype=str, keep_default_na=False, na_values=[""])
    return _normalise_cols(df)


def validate_courses_csv(df: pd.DataFrame) -> pd.DataFrame:
    required = {"coefficient", "course_type"}
    missing = required - set(df.columns)
    if missing:
        raise InvalidCourseDataError(
            f"Missing columns: {sorted(missing)}. Expected: Coefficient, Course_Type."
        )
    out = df.copy()
    for col in COURSE_COLUMNS:
        if col not in out.columns:
            out[col] = None
    return out[COURSE_COLUMNS]


def _optional_float(value, column: str, row_number: int) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidCourseDataError(f"Row {row_number}: {column} is not a number ({value!r})") from None
    if not np.isfinite(number):
        raise InvalidCourseDataError(f"Row {row_number}: {column} must be a finite number ({value!r})")
    return number


def _optional_grade(value, column: str, row_number: int) -> Optional[float]:
    grade = _optional_float(value, column, row_number)
    if grade is not None and not config.GRADE_MIN <= grade <= config.GRADE_MAX:
        raise InvalidCourseDataError(
            f"Row {row_number}: {column} must be between {config.GRADE_MIN:g} and {config.GRADE_MAX:g} (got {grade:g})"
        )
    return grade


def parse_courses(df: pd.DataFrame, id_factory: Optional[Callable[[], str]] = None) -> List[Course]:
    """
    One Course per row, in file order.

    Rows without a positive coefficient are skipped since they cannot
    weigh in the average. Blank grade cells stay None.
    """
    make_id = id_factory or new_course_id
    courses = []
    for row_number, (_, row) in enumerate(df.iterrows(), start=1):
        coefficient = _optional_float(row.get("coefficient"), "coefficient", row_number)
        if coefficient is None or coefficient <= 0:
            logger.warning("Skipping row %d: coefficient must be positive (got %r)", row_number, coefficient)
            continue

        raw_type = row.get("course_type")
        course_type = CourseType.parse("" if pd.isna(raw_type) else str(raw_type).strip().lower())

        course_id = row.get("id")
        name = row.get("name")
        courses.append(
            Course(
                id=make_id() if course_id is None or pd.isna(course_id) else str(course_id),
                name="" if name is None or pd.isna(name) else str(name),
                coefficient=coefficient,
                course_type=course_type,
                exam_grade=_optional_grade(row.get("exam_grade"), "exam_grade", row_number),
                td_grade=_optional_grade(row.get("td_grade"), "td_grade", row_number),
                tp_grade=_optional_grade(row.get("tp_grade"), "tp_grade", row_number),
            )
        )

    logger.info("Parsed %d courses from %d rows", len(courses), len(df))
    return courses


def read_courses_csv(source, id_factory: Optional[Callable[[], str]] = None) -> List[Course]:
    return parse_courses(validate_courses_csv(read_csv_upload(source)), id_factory=id_factory)


def courses_to_frame(courses: List[Course]) -> pd.DataFrame:
    rows = [
        {
            "id": c.id,
            "name": c.name,
            "coefficient": c.coefficient,
            "course_type": CourseType.parse(c.course_type).value,
            "exam_grade": c.exam_grade,
            "td_grade": c.td_grade,
            "tp_grade": c.tp_grade,
        }
        for c in courses
    ]
    return pd.DataFrame(rows, columns=COURSE_COLUMNS)


def results_to_frame(result: GpaResult) -> pd.DataFrame:
    rows = [
        {
            "id": r.id,
            "name": r.name,
            "coefficient": r.coefficient,
            "final_grade": r.final_grade,
            "is_passing": r.is_passing,
        }
        for r in result.course_results
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def summary_to_dict(result: GpaResult, decimals: int = config.DISPLAY_DECIMALS) -> Dict[str, object]:
    return {
        "total_gpa": round_half_up(result.total_gpa, decimals),
        "total_coefficients": result.total_coefficients,
        "is_passing": result.is_passing,
        "courses": len(result.course_results),
        "passing_courses": sum(1 for r in result.course_results if r.is_passing),
    }
