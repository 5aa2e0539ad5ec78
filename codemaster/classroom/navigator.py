"""
Navigator - Read-only course views for the presentation layer.

Provides:
- Effective status of lessons and sub-lessons
- Course tree with per-stage completion counts
- Next/previous lesson lookups within a stage
- Recommended place to continue learning
- Progress summary statistics
"""

from dataclasses import dataclass
from typing import Optional

from codemaster.schemas import Course, Lesson, LessonStatus, Stage, SubLesson

from .engine import ProgressionEngine


@dataclass
class NavigationSubLesson:
    """Sub-lesson with its effective status."""
    sub_lesson: SubLesson
    status: LessonStatus


@dataclass
class NavigationLesson:
    """Lesson with sub-lesson statuses and completion counts."""
    lesson: Lesson
    status: LessonStatus
    sub_lessons: list[NavigationSubLesson]
    completed_count: int
    total_count: int


@dataclass
class NavigationStage:
    """Stage card data: lessons plus completed/total counts."""
    stage: Stage
    lessons: list[NavigationLesson]
    completed_count: int
    total_count: int


class Navigator:
    """
    Navigate a course using the engine's progress state.

    Never mutates progress; all changes go through ProgressionEngine.
    """

    def __init__(self, engine: ProgressionEngine):
        self.engine = engine

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def get_effective_status(self, node: Lesson | SubLesson) -> LessonStatus:
        """
        Get the status to display for a node.

        Uses the persisted status when present, otherwise the node's seed status
        from the course content.
        """
        return self.engine.lesson_completion_status.value.get(node.id, node.status)

    def get_status_indicator(self, node: Lesson | SubLesson) -> str:
        """
        Get status indicator for list display.

        Returns:
            ✓ for completed
            ○ for active
            ◌ for locked
        """
        status = self.get_effective_status(node)
        if status == LessonStatus.COMPLETED:
            return "✓"
        elif status == LessonStatus.ACTIVE:
            return "○"
        else:
            return "◌"

    # -------------------------------------------------------------------------
    # Course Tree
    # -------------------------------------------------------------------------

    def get_navigation_lesson(self, lesson: Lesson) -> NavigationLesson:
        sub_lessons = [
            NavigationSubLesson(sub_lesson=sub, status=self.get_effective_status(sub))
            for sub in lesson.sub_lessons
        ]
        return NavigationLesson(
            lesson=lesson,
            status=self.get_effective_status(lesson),
            sub_lessons=sub_lessons,
            completed_count=sum(1 for s in sub_lessons if s.status == LessonStatus.COMPLETED),
            total_count=len(sub_lessons),
        )

    def get_navigation_tree(self, course: Course) -> list[NavigationStage]:
        """Get all stages of a course annotated with lesson statuses."""
        tree = []
        for stage in course.stages:
            lessons = [self.get_navigation_lesson(lesson) for lesson in stage.lessons]
            tree.append(NavigationStage(
                stage=stage,
                lessons=lessons,
                completed_count=sum(1 for nav_lesson in lessons if nav_lesson.status == LessonStatus.COMPLETED),
                total_count=len(lessons),
            ))
        return tree

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_next_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get the lesson after lesson_id in the same stage."""
        return self._get_sibling(lesson_id, 1)

    def get_previous_lesson(self, lesson_id: str) -> Optional[Lesson]:
        """Get the lesson before lesson_id in the same stage."""
        return self._get_sibling(lesson_id, -1)

    def _get_sibling(self, lesson_id: str, offset: int) -> Optional[Lesson]:
        stage = self.engine.find_stage_for_lesson(lesson_id)
        if stage is None:
            return None
        ids = [lesson.id for lesson in stage.lessons]
        target = ids.index(lesson_id) + offset
        if target < 0 or target >= len(ids):
            return None
        return stage.lessons[target]

    def get_recommended_sub_lesson(self, course: Course) -> Optional[SubLesson]:
        """
        Get the place to continue learning.

        Priority:
        1. First active sub-lesson in course order
        2. First sub-lesson that is not completed
        3. None if the course is finished
        """
        sub_lessons = [
            sub
            for stage in course.stages
            for lesson in stage.lessons
            for sub in lesson.sub_lessons
        ]
        for sub in sub_lessons:
            if self.get_effective_status(sub) == LessonStatus.ACTIVE:
                return sub
        for sub in sub_lessons:
            if self.get_effective_status(sub) != LessonStatus.COMPLETED:
                return sub
        return None

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self, course: Course) -> dict:
        """Get lesson completion statistics for display."""
        tree = self.get_navigation_tree(course)
        lessons = [lesson for nav_stage in tree for lesson in nav_stage.lessons]

        total = len(lessons)
        completed = sum(1 for nav_lesson in lessons if nav_lesson.status == LessonStatus.COMPLETED)
        active = sum(1 for nav_lesson in lessons if nav_lesson.status == LessonStatus.ACTIVE)

        recommended = self.get_recommended_sub_lesson(course)

        return {
            "course_id": course.id,
            "total_lessons": total,
            "completed": completed,
            "active": active,
            "locked": total - completed - active,
            "completion_percent": round(completed / total * 100, 1) if total > 0 else 0,
            "stages": [
                {
                    "id": nav_stage.stage.id,
                    "title": nav_stage.stage.title,
                    "completed": nav_stage.completed_count,
                    "total": nav_stage.total_count,
                }
                for nav_stage in tree
            ],
            "recommended_sub_lesson_id": recommended.id if recommended else None,
        }
