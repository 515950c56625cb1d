"""Schemas for content API responses."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Difficulty(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    FILL_IN_THE_BLANK = "fill-in-the-blank"
    CODE_OUTPUT = "code-output"
    MATCH_PAIRS = "match-pairs"


class TopicDetailsResponse(BaseModel):
    """Detail page of a topic."""

    model_config = ConfigDict(from_attributes=True)

    topic_id: int
    title: str
    explanation: str | None = None
    code_example: str | None = None
    key_points: list[str] = []


class ArticleContent(BaseModel):
    """Library article with its markdown body."""

    topic_id: int
    title: str
    content: str


class SnippetContent(BaseModel):
    """Snippet with its markdown body."""

    snippet_id: int
    label: str
    content: str


class BlogSummary(BaseModel):
    """Blog list entry; the file reference stays internal."""

    model_config = ConfigDict(from_attributes=True)

    blog_id: int
    title: str
    description: str
    tags: list[str] = []


class BlogContent(BaseModel):
    blog_id: int
    title: str
    content: str


class MatchPair(BaseModel):
    left: str
    right: str


class QuestionResponse(BaseModel):
    """Quiz question as served to clients."""

    model_config = ConfigDict(from_attributes=True)

    question_id: int
    type: QuestionType
    topic: str
    difficulty: Difficulty
    question: str
    options: list[str] = []
    answer: Any
    explanation: str
    pairs: list[MatchPair] = []
