"""
Progress schemas for CodeMaster.

Defines the learner progress types shared by the engine and the store:
- Lesson status (LOCKED -> ACTIVE -> COMPLETED)
- Completion status and points maps, with JSON adapters for persistence
"""

from enum import Enum

from pydantic import TypeAdapter


class LessonStatus(str, Enum):
    LOCKED = "LOCKED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"


# node id (lesson or sub-lesson) -> status; absent ids count as LOCKED
CompletionStatusMap = dict[str, LessonStatus]

# node id -> last awarded amount, reset to 0 once collected
PointsMap = dict[str, int]

completion_status_adapter = TypeAdapter(CompletionStatusMap)
points_adapter = TypeAdapter(PointsMap)
