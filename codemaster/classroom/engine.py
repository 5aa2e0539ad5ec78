"""
ProgressionEngine - Unlocking, completion and point collection for a learner.

Holds the completion status map and the points map as observable values:
- Restores both maps from a KeyValueStore on construction
- Marks sub-lessons complete and cascades completion to the owning lesson
- Unlocks the next sub-lesson and the next lesson in the stage
- Awards points as a pulse (N then 0) so subscribers can react to it
- Flushes the affected map to the store after every mutation

All methods are expected to run on one thread of control.
"""

import logging
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from codemaster.schemas import (
    Course,
    Lesson,
    LessonStatus,
    Stage,
    completion_status_adapter,
    points_adapter,
)

from .observable import ObservableValue
from .store import COMPLETION_STATUS_KEY, POINTS_KEY, KeyValueStore

logger = logging.getLogger(__name__)


class ProgressionEngine:
    """
    Single-writer state container for learner progression.

    Combines the read-only course tree with persisted learner state.
    """

    def __init__(self, courses: Sequence[Course], store: KeyValueStore):
        """
        Initialize engine and restore persisted progress.

        Args:
            courses: Content tree, never mutated
            store: Store holding the serialized progress maps
        """
        self.courses = list(courses)
        self.store = store

        self._selected_course: ObservableValue[Optional[Course]] = ObservableValue(None)
        self._selected_stage: ObservableValue[Optional[Stage]] = ObservableValue(None)
        self._selected_lesson: ObservableValue[Optional[Lesson]] = ObservableValue(None)
        self._selected_sub_lesson_index: ObservableValue[int] = ObservableValue(0)
        self._selected_lesson_index: ObservableValue[int] = ObservableValue(0)

        self._lesson_completion_status: ObservableValue[dict[str, LessonStatus]] = ObservableValue(
            self._load_map(COMPLETION_STATUS_KEY, completion_status_adapter)
        )
        self._points: ObservableValue[dict[str, int]] = ObservableValue(
            self._load_map(POINTS_KEY, points_adapter)
        )

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    @property
    def selected_course(self) -> ObservableValue[Optional[Course]]:
        return self._selected_course

    @property
    def selected_stage(self) -> ObservableValue[Optional[Stage]]:
        return self._selected_stage

    @property
    def selected_lesson(self) -> ObservableValue[Optional[Lesson]]:
        return self._selected_lesson

    @property
    def selected_sub_lesson_index(self) -> ObservableValue[int]:
        return self._selected_sub_lesson_index

    @property
    def selected_lesson_index(self) -> ObservableValue[int]:
        return self._selected_lesson_index

    @property
    def lesson_completion_status(self) -> ObservableValue[dict[str, LessonStatus]]:
        return self._lesson_completion_status

    @property
    def points(self) -> ObservableValue[dict[str, int]]:
        return self._points

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select_language(self, course: Course):
        self._selected_course.publish(course)

    def select_stage(self, stage: Stage):
        self._selected_stage.publish(stage)

    def select_lesson(self, lesson: Lesson):
        self._selected_lesson.publish(lesson)

    def select_sub_lesson_index(self, index: int):
        self._selected_sub_lesson_index.publish(index)

    def select_lesson_index(self, index: int):
        self._selected_lesson_index.publish(index)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_current_stage(self) -> Optional[Stage]:
        """Get the selected stage, re-resolved by id inside the selected course."""
        course = self._selected_course.value
        stage = self._selected_stage.value
        if course is None or stage is None:
            return None
        return next((s for s in course.stages if s.id == stage.id), None)

    def get_current_lesson(self) -> Optional[Lesson]:
        """Get the selected lesson, re-resolved by id inside the current stage."""
        stage = self.get_current_stage()
        lesson = self._selected_lesson.value
        if stage is None or lesson is None:
            return None
        return next((candidate for candidate in stage.lessons if candidate.id == lesson.id), None)

    def find_lesson_by_id(self, lesson_id: str) -> Optional[Lesson]:
        """
        Find a lesson anywhere in the content tree.

        Only top-level lessons are searched; sub-lesson ids never match unless
        they collide with a lesson id.
        """
        for course in self.courses:
            for stage in course.stages:
                for lesson in stage.lessons:
                    if lesson.id == lesson_id:
                        return lesson
        return None

    def find_stage_for_lesson(self, lesson_id: str) -> Optional[Stage]:
        """Find the stage whose lesson sequence contains lesson_id."""
        for course in self.courses:
            for stage in course.stages:
                if any(lesson.id == lesson_id for lesson in stage.lessons):
                    return stage
        return None

    def status_of(self, node_id: str) -> LessonStatus:
        """Get the status of a lesson or sub-lesson; unknown ids are LOCKED."""
        return self._lesson_completion_status.value.get(node_id, LessonStatus.LOCKED)

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------

    def mark_sub_lesson_as_completed(self, sub_lesson_id: str, lesson_id: str):
        """
        Complete a sub-lesson and run the completion cascade.

        Completes the owning lesson once all of its sub-lessons are completed,
        unlocks the next lesson when that happens, and always tries to unlock
        the next sub-lesson.
        """
        if self.status_of(sub_lesson_id) != LessonStatus.COMPLETED:
            self._set_status(sub_lesson_id, LessonStatus.COMPLETED)
            logger.debug(f"Sub-lesson completed: {sub_lesson_id}")
            self.collect_points_for_sub_lesson(sub_lesson_id)

        lesson = self.find_lesson_by_id(lesson_id)
        if lesson is not None:
            if self._all_sub_lessons_completed(lesson) and self.status_of(lesson.id) != LessonStatus.COMPLETED:
                self._set_status(lesson.id, LessonStatus.COMPLETED)
                logger.debug(f"Lesson completed: {lesson.id}")
                self.collect_points_for_lesson(lesson.id)
                self.unlock_next_lesson(lesson)

            self.unlock_next_sub_lesson(lesson, sub_lesson_id)

        self._save_completion_status()

    def update_lesson_completion_status(self):
        """Re-check the selected lesson and complete it if all sub-lessons are done."""
        lesson = self.get_current_lesson()
        if lesson is None:
            return
        if self._all_sub_lessons_completed(lesson) and self.status_of(lesson.id) != LessonStatus.COMPLETED:
            self._set_status(lesson.id, LessonStatus.COMPLETED)
            logger.debug(f"Lesson updated to completed: {lesson.id}")
            self.collect_points_for_lesson(lesson.id)
            self._save_completion_status()

    def _all_sub_lessons_completed(self, lesson: Lesson) -> bool:
        return all(
            self.status_of(sub.id) == LessonStatus.COMPLETED
            for sub in lesson.sub_lessons
        )

    # -------------------------------------------------------------------------
    # Unlocking
    # -------------------------------------------------------------------------

    def unlock_next_lesson(self, current_lesson: Lesson):
        """Unlock the lesson after current_lesson in its stage, plus its first sub-lesson."""
        stage = self.find_stage_for_lesson(current_lesson.id)
        if stage is None:
            return
        index = next(
            (i for i, lesson in enumerate(stage.lessons) if lesson.id == current_lesson.id),
            -1,
        )
        if index < 0 or index >= len(stage.lessons) - 1:
            return

        next_lesson = stage.lessons[index + 1]
        if self._is_unlockable(next_lesson.id):
            self._set_status(next_lesson.id, LessonStatus.ACTIVE)
            logger.debug(f"Next lesson unlocked: {next_lesson.id}")

            if next_lesson.sub_lessons:
                first_sub = next_lesson.sub_lessons[0]
                if self._is_unlockable(first_sub.id):
                    self._set_status(first_sub.id, LessonStatus.ACTIVE)
                    logger.debug(f"First sub-lesson unlocked: {first_sub.id}")

        self._save_completion_status()

    def unlock_next_sub_lesson(self, current_lesson: Lesson, current_sub_lesson_id: str):
        """Unlock the sub-lesson after current_sub_lesson_id unless it is already open."""
        index = next(
            (i for i, sub in enumerate(current_lesson.sub_lessons) if sub.id == current_sub_lesson_id),
            -1,
        )
        if index < 0 or index >= len(current_lesson.sub_lessons) - 1:
            return

        next_sub = current_lesson.sub_lessons[index + 1]
        if self._is_unlockable(next_sub.id):
            self._set_status(next_sub.id, LessonStatus.ACTIVE)
            logger.debug(f"Next sub-lesson unlocked: {next_sub.id}")
        else:
            logger.debug(f"Next sub-lesson skipped: {next_sub.id} already {self.status_of(next_sub.id).value}")

        self._save_completion_status()

    def _is_unlockable(self, node_id: str) -> bool:
        # only LOCKED (or unknown) nodes move forward to ACTIVE
        return self.status_of(node_id) == LessonStatus.LOCKED

    # -------------------------------------------------------------------------
    # Points
    # -------------------------------------------------------------------------

    def collect_points_for_sub_lesson(self, sub_lesson_id: str):
        """Collect points for a sub-lesson (resolved through find_lesson_by_id)."""
        self._collect_points(sub_lesson_id)

    def collect_points_for_lesson(self, lesson_id: str):
        """Collect points for a lesson."""
        self._collect_points(lesson_id)

    def _collect_points(self, node_id: str):
        lesson = self.find_lesson_by_id(node_id)
        if lesson is not None and lesson.points > 0:
            # award then reset: subscribers observe N followed by 0
            self._set_points(node_id, lesson.points)
            logger.debug(f"Points collected for {node_id}: {lesson.points}")
            self._set_points(node_id, 0)
        self._save_points()

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset_progress(self):
        """Forget all completion and points state for this learner."""
        self._lesson_completion_status.publish({})
        self._points.publish({})
        self._save_completion_status()
        self._save_points()
        logger.info("Progress reset")

    # -------------------------------------------------------------------------
    # State writes and persistence
    # -------------------------------------------------------------------------

    def _set_status(self, node_id: str, status: LessonStatus):
        updated = dict(self._lesson_completion_status.value)
        updated[node_id] = status
        self._lesson_completion_status.publish(updated)

    def _set_points(self, node_id: str, amount: int):
        updated = dict(self._points.value)
        updated[node_id] = amount
        self._points.publish(updated)

    def _save_completion_status(self):
        payload = completion_status_adapter.dump_json(self._lesson_completion_status.value)
        self.store.set(COMPLETION_STATUS_KEY, payload.decode("utf-8"))

    def _save_points(self):
        payload = points_adapter.dump_json(self._points.value)
        self.store.set(POINTS_KEY, payload.decode("utf-8"))

    def _load_map(self, key: str, adapter: TypeAdapter) -> dict:
        """Load one persisted map; absent or unreadable data yields an empty map."""
        raw = self.store.get(key)
        if raw is None:
            return {}
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Ignoring unreadable {key!r} data ({e.error_count()} errors)")
            return {}
