#!/usr/bin/env python3
"""
show_progress.py - Print a learner's progress through the packaged courses.

Reads the progress database (CODEMASTER_HOME/progress.db, default
~/.codemaster/progress.db) and prints stage and lesson status.

Usage:
  python scripts/show_progress.py
  python scripts/show_progress.py --profile alice
  python scripts/show_progress.py --db data/progress.db --complete beginner_c1_sub1 beginner_c1
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from codemaster.classroom import (
    DEFAULT_PROGRESS_DB,
    CourseLoader,
    Navigator,
    ProgressionEngine,
    SqliteKeyValueStore,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def report_points(points: dict[str, int]):
    """Log the non-zero half of each points pulse."""
    for node_id, amount in points.items():
        if amount > 0:
            logger.info(f"Collected {amount} points for {node_id}")


def print_course(navigator: Navigator, course):
    summary = navigator.get_progress_summary(course)
    print(f"\n{course.language} ({course.id}): "
          f"{summary['completed']}/{summary['total_lessons']} lessons "
          f"({summary['completion_percent']}%)")

    for nav_stage in navigator.get_navigation_tree(course):
        print(f"  {nav_stage.stage.title} ({nav_stage.completed_count}/{nav_stage.total_count})")
        for nav_lesson in nav_stage.lessons:
            lesson = nav_lesson.lesson
            print(f"    {navigator.get_status_indicator(lesson)} {lesson.title}")
            for nav_sub in nav_lesson.sub_lessons:
                print(f"        {navigator.get_status_indicator(nav_sub.sub_lesson)} {nav_sub.sub_lesson.title}")

    if summary["recommended_sub_lesson_id"]:
        print(f"  Continue with: {summary['recommended_sub_lesson_id']}")


def main():
    parser = argparse.ArgumentParser(description="Show learner progress")
    parser.add_argument(
        "--db",
        type=Path,
        default=DEFAULT_PROGRESS_DB,
        help="Progress database path"
    )
    parser.add_argument(
        "--profile",
        default="default",
        help="Learner profile id"
    )
    parser.add_argument(
        "--complete",
        nargs=2,
        metavar=("SUB_LESSON_ID", "LESSON_ID"),
        help="Mark a sub-lesson as completed before printing"
    )

    args = parser.parse_args()

    courses = CourseLoader().get_courses()
    store = SqliteKeyValueStore(args.db, profile_id=args.profile)
    engine = ProgressionEngine(courses, store)

    if args.complete:
        sub_lesson_id, lesson_id = args.complete
        if engine.find_lesson_by_id(lesson_id) is None:
            logger.error(f"Unknown lesson: {lesson_id}")
            sys.exit(1)
        engine.points.subscribe(report_points)
        engine.mark_sub_lesson_as_completed(sub_lesson_id, lesson_id)

    navigator = Navigator(engine)
    for course in courses:
        print_course(navigator, course)


if __name__ == "__main__":
    main()
