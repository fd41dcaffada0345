"""
JSON import/export of calculator data.

Files use the calculator's export layout:

    {
      "courses": [{"id": ..., "name": ..., "coefficient": ..., "courseType": ...,
                   "examGrade": ..., "tdGrade": ..., "tpGrade": ...}],
      "templateName": "...",
      "templateDescription": "..."
    }

Grades that were never entered are left out of the course objects.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gpa_calculator import config
from gpa_calculator.backend_logic import (
    Course,
    CourseType,
    InvalidCourseDataError,
    new_course_id,
)
from gpa_calculator.logger import get_logger

logger = get_logger(__name__)


class CourseRecord(BaseModel):
    """One course as stored in an exported calculator file."""

    id: Optional[str] = None
    name: Optional[str] = None
    coefficient: float = Field(..., strict=True, allow_inf_nan=False)
    # checked against CourseType after validation so an unknown type keeps its own error
    course_type: str = Field(..., alias="courseType")
    exam_grade: Optional[float] = Field(
        None, alias="examGrade", strict=True, allow_inf_nan=False, ge=config.GRADE_MIN, le=config.GRADE_MAX
    )
    td_grade: Optional[float] = Field(
        None, alias="tdGrade", strict=True, allow_inf_nan=False, ge=config.GRADE_MIN, le=config.GRADE_MAX
    )
    tp_grade: Optional[float] = Field(
        None, alias="tpGrade", strict=True, allow_inf_nan=False, ge=config.GRADE_MIN, le=config.GRADE_MAX
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_course(self, id_factory: Optional[Callable[[], str]] = None) -> Course:
        return Course(
            id=self.id or (id_factory or new_course_id)(),
            name=self.name or "",
            coefficient=self.coefficient,
            course_type=CourseType.parse(self.course_type),
            exam_grade=self.exam_grade,
            td_grade=self.td_grade,
            tp_grade=self.tp_grade,
        )


class TemplateRecord(BaseModel):
    courses: List[CourseRecord]
    template_name: Optional[str] = Field(None, alias="templateName")
    template_description: Optional[str] = Field(None, alias="templateDescription")

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class CalculatorTemplate:
    name: str = ""
    description: str = ""
    courses: List[Course] = field(default_factory=list)


def course_from_dict(data: Dict[str, Any], id_factory: Optional[Callable[[], str]] = None) -> Course:
    try:
        record = CourseRecord.model_validate(data)
    except ValidationError as e:
        raise InvalidCourseDataError(f"Invalid course entry: {e}") from e
    return record.to_course(id_factory=id_factory)


def course_to_dict(course: Course) -> Dict[str, Any]:
    # built without validation: exporting never rejects what the user entered
    record = CourseRecord.model_construct(
        id=course.id,
        name=course.name,
        coefficient=course.coefficient,
        course_type=CourseType.parse(course.course_type).value,
        exam_grade=course.exam_grade,
        td_grade=course.td_grade,
        tp_grade=course.tp_grade,
    )
    return record.model_dump(by_alias=True, exclude_none=True)


def load_template(text: str, id_factory: Optional[Callable[[], str]] = None) -> CalculatorTemplate:
    try:
        record = TemplateRecord.model_validate_json(text)
    except ValidationError as e:
        raise InvalidCourseDataError(f"Invalid file format: {e}") from e

    template = CalculatorTemplate(
        name=record.template_name or "",
        description=record.template_description or "",
        courses=[c.to_course(id_factory=id_factory) for c in record.courses],
    )
    logger.info("Loaded %d courses from template %r", len(template.courses), template.name)
    return template


def dump_template(courses: List[Course], name: str = "", description: str = "") -> str:
    data = {
        "courses": [course_to_dict(c) for c in courses],
        "templateName": name,
        "templateDescription": description,
    }
    return json.dumps(data, indent=2)


def read_template(path: Union[str, Path], id_factory: Optional[Callable[[], str]] = None) -> CalculatorTemplate:
    return load_template(Path(path).read_text(encoding="utf-8"), id_factory=id_factory)


def write_template(path: Union[str, Path], courses: List[Course], name: str = "", description: str = "") -> Path:
    path = Path(path)
    path.write_text(dump_template(courses, name=name, description=description), encoding="utf-8")
    logger.info("Wrote %d courses to %s", len(courses), path)
    return path
