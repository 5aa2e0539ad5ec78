"""
CodeMaster Classroom - Runtime components for course progression.

This module provides:
- CourseLoader: Load course content from YAML files
- KeyValueStore implementations: Persist learner progress
- ProgressionEngine: Unlocking, completion and points
- Navigator: Read-only course views for display
"""

from .loader import (
    CourseLoader,
    DEFAULT_COURSES_DIR,
    load_course_file,
    validate_course,
)

from .store import (
    KeyValueStore,
    InMemoryKeyValueStore,
    SqliteKeyValueStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
    COMPLETION_STATUS_KEY,
    POINTS_KEY,
)

from .observable import ObservableValue

from .engine import ProgressionEngine

from .navigator import (
    Navigator,
    NavigationStage,
    NavigationLesson,
    NavigationSubLesson,
)

__all__ = [
    # Loader
    "CourseLoader",
    "DEFAULT_COURSES_DIR",
    "load_course_file",
    "validate_course",
    # Store
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    "COMPLETION_STATUS_KEY",
    "POINTS_KEY",
    # Engine
    "ObservableValue",
    "ProgressionEngine",
    # Navigator
    "Navigator",
    "NavigationStage",
    "NavigationLesson",
    "NavigationSubLesson",
]
