"""
Shared fixtures: a small two-stage course and engines over in-memory stores.

Layout of the sample course:
    beginner_stage:      L1 (A, B; 20 points), L2 (C, D; 10 points)
    intermediate_stage:  L3 (E; 30 points)
"""

import pytest

from codemaster.classroom import InMemoryKeyValueStore, ProgressionEngine
from codemaster.schemas import Course


def make_course(stages: dict, course_id: str = "course_test") -> Course:
    """
    Build a course from {stage_id: [(lesson_id, [sub_ids], points), ...]}.
    """
    return Course.model_validate({
        "id": course_id,
        "language": "C",
        "stages": [
            {
                "id": stage_id,
                "title": stage_id.replace("_", " ").title(),
                "lessons": [
                    {
                        "id": lesson_id,
                        "title": f"Lesson {lesson_id}",
                        "points": points,
                        "sub_lessons": [
                            {"id": sub_id, "title": f"Sub-lesson {sub_id}"}
                            for sub_id in sub_ids
                        ],
                    }
                    for lesson_id, sub_ids, points in lessons
                ],
            }
            for stage_id, lessons in stages.items()
        ],
    })


@pytest.fixture
def course() -> Course:
    return make_course({
        "beginner_stage": [
            ("L1", ["A", "B"], 20),
            ("L2", ["C", "D"], 10),
        ],
        "intermediate_stage": [
            ("L3", ["E"], 30),
        ],
    })


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def engine(course, store) -> ProgressionEngine:
    return ProgressionEngine([course], store)
