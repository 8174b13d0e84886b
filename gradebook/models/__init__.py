# gradebook/models/__init__.py

from .student_schemas import (
    SUBJECTS,
    Scores,
    StudentCreate,
    StudentGPA,
    StudentOut,
    StudentUpdate,
)

__all__ = [
    "SUBJECTS",
    "Scores",
    "StudentCreate",
    "StudentGPA",
    "StudentOut",
    "StudentUpdate",
]
