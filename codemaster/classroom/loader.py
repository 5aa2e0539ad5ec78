"""
CourseLoader - Load the read-only content tree from YAML course files.

Provides:
- Discovery of course files in a directory (one course per *.yaml file)
- Validation into Course models
- Structural checks used by scripts/validate_course.py
"""

from collections import Counter
from pathlib import Path
from typing import Optional

import yaml

from codemaster.schemas import Course


# Packaged sample courses
DEFAULT_COURSES_DIR = Path(__file__).parent.parent / "data" / "courses"


def load_course_file(path: str | Path) -> Course:
    """
    Load and validate a single course file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        pydantic.ValidationError: If the content doesn't match the course schema
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Course file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return Course.model_validate(data)


class CourseLoader:
    """
    Load courses from a directory of YAML files.

    Courses are parsed once and cached; the content tree never changes after
    startup.
    """

    def __init__(self, courses_dir: Optional[str | Path] = None):
        """
        Initialize loader.

        Args:
            courses_dir: Directory with *.yaml course files (default: packaged courses)
        """
        self.courses_dir = Path(courses_dir) if courses_dir else DEFAULT_COURSES_DIR
        if not self.courses_dir.is_dir():
            raise FileNotFoundError(f"Courses directory not found: {self.courses_dir}")
        self._cache: dict[str, Course] = {}

    def get_course_files(self) -> list[Path]:
        """List course files sorted by name."""
        return sorted(self.courses_dir.glob("*.yaml"))

    def get_courses(self) -> list[Course]:
        """Load every course in the directory, in file name order."""
        courses = []
        for path in self.get_course_files():
            key = path.stem
            if key not in self._cache:
                self._cache[key] = load_course_file(path)
            courses.append(self._cache[key])
        return courses

    def get_course(self, course_id: str) -> Optional[Course]:
        """Get a course by its id, or None."""
        for course in self.get_courses():
            if course.id == course_id:
                return course
        return None


def validate_course(course: Course) -> list[str]:
    """
    Check a course for structural problems the schema can't express.

    Returns:
        List of human-readable problems (empty if the course is sound)
    """
    problems = []

    node_ids = [stage.id for stage in course.stages]
    for stage in course.stages:
        if not stage.lessons:
            problems.append(f"Stage {stage.id!r} has no lessons")
        for lesson in stage.lessons:
            node_ids.append(lesson.id)
            node_ids.extend(sub.id for sub in lesson.sub_lessons)

            if not lesson.sub_lessons:
                problems.append(f"Lesson {lesson.id!r} has no sub-lessons")

            sub_ids = {sub.id for sub in lesson.sub_lessons}
            for content in lesson.lesson_contents:
                if content.id not in sub_ids:
                    problems.append(
                        f"Content {content.id!r} in lesson {lesson.id!r} matches no sub-lesson"
                    )

    # progress maps are keyed by id, so ids must be unique across the course
    for node_id, count in sorted(Counter(node_ids).items()):
        if count > 1:
            problems.append(f"Id {node_id!r} is used {count} times")

    return problems
