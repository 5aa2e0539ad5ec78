"""
Course loader tests, including the packaged sample course.
"""

import pytest
import yaml
from pydantic import ValidationError

from codemaster.classroom import (
    DEFAULT_COURSES_DIR,
    CourseLoader,
    load_course_file,
    validate_course,
)
from codemaster.schemas import CodeBlock, LessonContentType, LessonStatus, QuizBlock

from conftest import make_course


COURSE_YAML = """
id: course_py
language: Python
stages:
  - id: basics
    title: Basics
    lessons:
      - id: py1
        title: Hello
        points: 5
        sub_lessons:
          - id: py1_sub1
            title: Print
"""


class TestPackagedCourse:
    """Test the sample C course shipped with the package."""

    def test_default_dir_has_courses(self):
        loader = CourseLoader()
        assert loader.courses_dir == DEFAULT_COURSES_DIR
        assert [course.id for course in loader.get_courses()] == ["course_c_beginner"]

    def test_structure(self):
        course = CourseLoader().get_course("course_c_beginner")
        assert course.language == "C"
        assert [stage.id for stage in course.stages] == ["beginner_stage", "intermediate_stage"]

        first = course.stages[0].lessons[0]
        assert first.id == "beginner_c1"
        assert first.status == LessonStatus.ACTIVE
        assert [sub.id for sub in first.sub_lessons] == [
            "beginner_c1_sub1",
            "beginner_c1_sub2",
            "beginner_c1_sub3",
        ]
        assert all(sub.lesson_id == "beginner_c1" for sub in first.sub_lessons)
        assert first.sub_lessons[0].status == LessonStatus.ACTIVE
        assert first.sub_lessons[1].status == LessonStatus.LOCKED

    def test_content_blocks(self):
        course = CourseLoader().get_course("course_c_beginner")
        syntax = course.stages[0].lessons[0].lesson_contents[1]
        assert isinstance(syntax.content_blocks[1], CodeBlock)
        assert "int main()" in syntax.content_blocks[1].code

        loops = course.stages[1].lessons[0].lesson_contents[1]
        assert loops.type == LessonContentType.QUIZ
        assert isinstance(loops.content_blocks[0], QuizBlock)

    def test_packaged_course_is_valid(self):
        for course in CourseLoader().get_courses():
            assert validate_course(course) == []


class TestCourseLoader:
    """Test loading from custom directories."""

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            CourseLoader(tmp_path / "missing")

    def test_empty_directory(self, tmp_path):
        assert CourseLoader(tmp_path).get_courses() == []

    def test_load_and_cache(self, tmp_path):
        (tmp_path / "python.yaml").write_text(COURSE_YAML, encoding="utf-8")
        loader = CourseLoader(tmp_path)

        course = loader.get_course("course_py")
        assert course.stages[0].lessons[0].points == 5
        assert loader.get_course("course_py") is course
        assert loader.get_course("missing") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_course_file(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("id: [unclosed", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_course_file(path)

    def test_invalid_course(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("id: course_bad\nstages: []\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_course_file(path)


class TestValidateCourse:
    """Test structural checks."""

    def test_sound_course(self, course):
        assert validate_course(course) == []

    def test_duplicate_ids(self):
        course = make_course({
            "stage": [
                ("L1", ["A", "B"], 0),
                ("L2", ["A"], 0),
            ],
        })
        assert validate_course(course) == ["Id 'A' is used 2 times"]

    def test_lesson_id_reused_as_sub_lesson(self):
        course = make_course({"stage": [("L1", ["L1"], 0)]})
        assert validate_course(course) == ["Id 'L1' is used 2 times"]

    def test_empty_nodes(self):
        course = make_course({
            "empty_stage": [],
            "stage": [("L1", [], 0)],
        })
        problems = validate_course(course)
        assert "Stage 'empty_stage' has no lessons" in problems
        assert "Lesson 'L1' has no sub-lessons" in problems

    def test_orphan_content(self):
        course = make_course({"stage": [("L1", ["A"], 0)]})
        data = course.model_dump()
        data["stages"][0]["lessons"][0]["lesson_contents"] = [{"id": "Z", "title": "Orphan"}]
        course = type(course).model_validate(data)

        assert validate_course(course) == ["Content 'Z' in lesson 'L1' matches no sub-lesson"]
