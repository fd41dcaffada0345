"""Tests for JSON template import/export."""

import json

import pytest

from gpa_calculator.backend_logic import (
    Course,
    CourseType,
    InvalidCourseDataError,
    UnknownCourseTypeError,
    calculate_gpa,
)
from gpa_calculator.io_json import (
    course_from_dict,
    course_to_dict,
    dump_template,
    load_template,
    read_template,
    write_template,
)

EXPORTED = """
{
  "courses": [
    {"id": "a1", "name": "Algorithms", "coefficient": 3, "courseType": "tp_td_exam",
     "examGrade": 14, "tdGrade": 16, "tpGrade": 15},
    {"id": "b2", "name": "Analysis", "coefficient": 2, "courseType": "td_exam",
     "examGrade": 13, "tdGrade": 12}
  ],
  "templateName": "L2 Informatique S3",
  "templateDescription": "Third semester"
}
"""


def test_load_template():
    template = load_template(EXPORTED)

    assert template.name == "L2 Informatique S3"
    assert template.description == "Third semester"
    assert [c.id for c in template.courses] == ["a1", "b2"]
    assert template.courses[1].tp_grade is None
    assert template.courses[0].course_type is CourseType.TP_TD_EXAM


def test_loaded_template_aggregates():
    result = calculate_gpa(load_template(EXPORTED).courses)
    assert result.total_gpa == pytest.approx(13.8)
    assert result.is_passing is True


def test_template_without_name_or_description():
    template = load_template('{"courses": []}')
    assert template.name == ""
    assert template.description == ""
    assert template.courses == []


@pytest.mark.parametrize("text", ['{"templateName": "x"}', '{"courses": {}}', "[]", "not json"])
def test_invalid_template_raises(text):
    with pytest.raises(InvalidCourseDataError):
        load_template(text)


def test_course_missing_id_gets_generated():
    course = course_from_dict({"coefficient": 1, "courseType": "exam"}, id_factory=lambda: "new-id")
    assert course.id == "new-id"
    assert course.name == ""
    assert course.exam_grade is None


def test_course_null_grade_is_absent():
    course = course_from_dict({"id": "x", "coefficient": 1, "courseType": "exam", "examGrade": None})
    assert course.exam_grade is None


def test_course_missing_keys_raises():
    with pytest.raises(InvalidCourseDataError, match="courseType"):
        course_from_dict({"id": "x", "coefficient": 1})


def test_course_non_numeric_grade_raises():
    with pytest.raises(InvalidCourseDataError, match="examGrade"):
        course_from_dict({"id": "x", "coefficient": 1, "courseType": "exam", "examGrade": "12"})


def test_course_unknown_type_raises():
    with pytest.raises(UnknownCourseTypeError):
        course_from_dict({"id": "x", "coefficient": 1, "courseType": "oral"})


def test_course_to_dict_leaves_out_missing_grades():
    course = Course(id="x", name="Physics", coefficient=2, course_type=CourseType.TD_EXAM, exam_grade=11)
    assert course_to_dict(course) == {
        "id": "x",
        "name": "Physics",
        "coefficient": 2,
        "courseType": "td_exam",
        "examGrade": 11,
    }


def test_dump_template_layout():
    courses = load_template(EXPORTED).courses
    data = json.loads(dump_template(courses, name="S3", description="desc"))

    assert set(data) == {"courses", "templateName", "templateDescription"}
    assert data["templateName"] == "S3"
    assert data["courses"][1] == {
        "id": "b2",
        "name": "Analysis",
        "coefficient": 2.0,
        "courseType": "td_exam",
        "examGrade": 13.0,
        "tdGrade": 12.0,
    }


def test_write_then_read_template(tmp_path):
    courses = load_template(EXPORTED).courses
    path = write_template(tmp_path / "s3.json", courses, name="S3")

    template = read_template(path)
    assert template.name == "S3"
    assert template.courses == courses


@pytest.mark.parametrize("grade", [-0.5, 20.01, 250, float("inf"), float("nan")])
def test_course_grade_outside_scale_raises(grade):
    with pytest.raises(InvalidCourseDataError, match="tdGrade"):
        course_from_dict({"id": "x", "coefficient": 1, "courseType": "td_exam", "tdGrade": grade})


def test_course_grade_on_scale_bounds():
    course = course_from_dict(
        {"id": "x", "coefficient": 1, "courseType": "td_exam", "examGrade": 0, "tdGrade": 20}
    )
    assert (course.exam_grade, course.td_grade) == (0.0, 20.0)


@pytest.mark.parametrize("coefficient", ["2", True, float("inf")])
def test_course_bad_coefficient_raises(coefficient):
    with pytest.raises(InvalidCourseDataError, match="coefficient"):
        course_from_dict({"id": "x", "coefficient": coefficient, "courseType": "exam"})


def test_template_with_out_of_range_grade_raises():
    text = '{"courses": [{"id": "a", "coefficient": 1, "courseType": "exam", "examGrade": 21}]}'
    with pytest.raises(InvalidCourseDataError, match="examGrade"):
        load_template(text)


def test_course_accepts_field_names():
    course = course_from_dict({"id": "x", "coefficient": 1, "course_type": "exam", "exam_grade": 9.5})
    assert course.exam_grade == 9.5
