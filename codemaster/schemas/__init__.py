"""
CodeMaster Schemas - Pydantic models for the learn-to-code platform.

This module exports all schema classes for:
- Course: course/stage/lesson/sub-lesson tree and lesson content blocks
- Progress: lesson status and the persisted progress maps
"""

# Course schemas
from .course import (
    LessonContentType,
    TextBlock,
    CodeBlock,
    ImageBlock,
    QuizBlock,
    ContentBlock,
    LessonContent,
    SubLesson,
    Lesson,
    Stage,
    Course,
)

# Progress schemas
from .progress import (
    LessonStatus,
    CompletionStatusMap,
    PointsMap,
    completion_status_adapter,
    points_adapter,
)

__all__ = [
    # Course
    'LessonContentType',
    'TextBlock',
    'CodeBlock',
    'ImageBlock',
    'QuizBlock',
    'ContentBlock',
    'LessonContent',
    'SubLesson',
    'Lesson',
    'Stage',
    'Course',
    # Progress
    'LessonStatus',
    'CompletionStatusMap',
    'PointsMap',
    'completion_status_adapter',
    'points_adapter',
]
