"""
Course content schemas for CodeMaster.

Defines Pydantic models for the read-only content tree:
- Course -> Stage -> Lesson -> SubLesson hierarchy
- Lesson contents made of text, code, image and quiz blocks

The tree is built once at startup and never mutated, so every model is frozen.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .progress import LessonStatus


class _ContentModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# -----------------------------------------------------------------------------
# Content blocks (display payload, irrelevant to progression)
# -----------------------------------------------------------------------------

class LessonContentType(str, Enum):
    NON_INTERACTIVE = "NON_INTERACTIVE"
    INTERACTIVE = "INTERACTIVE"
    QUIZ = "QUIZ"


class ContentBlockBase(_ContentModel):
    kind: str


class TextBlock(ContentBlockBase):
    kind: Literal["text"] = "text"
    text: str


class CodeBlock(ContentBlockBase):
    kind: Literal["code"] = "code"
    code: str


class ImageBlock(ContentBlockBase):
    kind: Literal["image"] = "image"
    image: str  # resource name, resolved by the presentation layer


class QuizBlock(ContentBlockBase):
    kind: Literal["quiz"] = "quiz"
    question: str
    options: list[str] = Field(..., min_length=2)
    correct_answer: str

    @model_validator(mode="after")
    def answer_in_options(self):
        if self.correct_answer not in self.options:
            raise ValueError(f"Correct answer {self.correct_answer!r} is not one of the options")
        return self


ContentBlock = Annotated[
    Union[TextBlock, CodeBlock, ImageBlock, QuizBlock],
    Field(discriminator="kind"),
]


class LessonContent(_ContentModel):
    id: str  # id of the sub-lesson this content illustrates
    title: str
    content_blocks: list[ContentBlock] = []
    type: LessonContentType = LessonContentType.NON_INTERACTIVE


# -----------------------------------------------------------------------------
# Course tree
# -----------------------------------------------------------------------------

class SubLesson(_ContentModel):
    """
    Smallest trackable unit of completion.

    Carries an explicit back-reference to its owning lesson instead of being
    nested as a lesson-shaped node.
    """
    id: str
    lesson_id: str
    position: int = Field(..., ge=0)  # 0-based ordinal within the lesson
    title: str
    description: str = ""
    status: LessonStatus = LessonStatus.LOCKED  # initial seed only


class Lesson(_ContentModel):
    id: str
    title: str
    description: str = ""
    sub_lessons: list[SubLesson] = []
    lesson_contents: list[LessonContent] = []
    points: int = Field(default=0, ge=0)
    status: LessonStatus = LessonStatus.LOCKED  # initial seed only

    @model_validator(mode="before")
    @classmethod
    def attach_sub_lessons(cls, data: Any) -> Any:
        """Fill in lesson_id and position for sub-lessons given as plain mappings."""
        if not isinstance(data, dict):
            return data
        sub_lessons = []
        for position, sub in enumerate(data.get("sub_lessons") or []):
            if isinstance(sub, dict):
                sub = {"lesson_id": data.get("id"), "position": position, **sub}
            sub_lessons.append(sub)
        return {**data, "sub_lessons": sub_lessons}

    @model_validator(mode="after")
    def sub_lessons_owned(self):
        for position, sub in enumerate(self.sub_lessons):
            if sub.lesson_id != self.id:
                raise ValueError(
                    f"Sub-lesson {sub.id!r} belongs to {sub.lesson_id!r}, not {self.id!r}"
                )
            if sub.position != position:
                raise ValueError(
                    f"Sub-lesson {sub.id!r} has position {sub.position}, expected {position}"
                )
        return self

    def get_sub_lesson(self, sub_lesson_id: str) -> Optional[SubLesson]:
        for sub in self.sub_lessons:
            if sub.id == sub_lesson_id:
                return sub
        return None


class Stage(_ContentModel):
    id: str
    title: str
    lessons: list[Lesson] = []


class Course(_ContentModel):
    id: str
    language: str
    stages: list[Stage] = []
