#!/usr/bin/env python3
"""
validate_course.py - Check course YAML files before shipping them.

Loads each course through the schema and reports structural problems:
duplicate ids, lessons without sub-lessons, content that matches no
sub-lesson.

Usage:
  python scripts/validate_course.py
  python scripts/validate_course.py --courses-dir path/to/courses
  python scripts/validate_course.py path/to/course.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import yaml
from pydantic import ValidationError

from codemaster.classroom import DEFAULT_COURSES_DIR, load_course_file, validate_course

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def check_file(path: Path) -> int:
    """Validate one course file and return the number of problems found."""
    logger.info(f"Checking {path}...")
    try:
        course = load_course_file(path)
    except (yaml.YAMLError, ValidationError) as e:
        logger.error(f"  Could not load course: {e}")
        return 1

    lesson_count = sum(len(stage.lessons) for stage in course.stages)
    logger.info(f"  {course.id} ({course.language}): {len(course.stages)} stages, {lesson_count} lessons")

    problems = validate_course(course)
    for problem in problems:
        logger.warning(f"  - {problem}")
    return len(problems)


def main():
    parser = argparse.ArgumentParser(description="Validate course YAML files")
    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        help="Course files to check (default: every file in --courses-dir)"
    )
    parser.add_argument(
        "--courses-dir",
        type=Path,
        default=DEFAULT_COURSES_DIR,
        help="Directory of course files"
    )

    args = parser.parse_args()

    files = args.files or sorted(args.courses_dir.glob("*.yaml"))
    if not files:
        logger.error(f"No course files found in {args.courses_dir}")
        sys.exit(1)

    total_problems = 0
    for path in files:
        if not path.exists():
            logger.error(f"File not found: {path}")
            total_problems += 1
            continue
        total_problems += check_file(path)

    if total_problems:
        logger.warning(f"Found {total_problems} problems in {len(files)} files")
        sys.exit(1)
    logger.info(f"All {len(files)} course files are valid")


if __name__ == "__main__":
    main()
