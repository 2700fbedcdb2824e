from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Role(str, Enum):
    INSTRUCTOR = "instructor"
    STUDENT = "student"


@dataclass(frozen=True)
class Account:
    id: int
    name: str
    email: str
    password: str
    role: Role


@dataclass(frozen=True)
class Lesson:
    id: int
    title: str
    description: str


@dataclass(frozen=True)
class ProgressEntry:
    student_id: int
    lesson_id: int
    completed_at: datetime


@dataclass(frozen=True)
class Principal:
    """Identity decoded from a verified access token."""
    id: int
    role: Role
