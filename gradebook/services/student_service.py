# gradebook/services/student_service.py
from typing import Any, Dict, List, Mapping, Optional

from pymongo import ReturnDocument
from pymongo.collection import Collection

from gradebook.core.logger import get_logger
from gradebook.models.student_schemas import (
    SUBJECTS,
    Scores,
    StudentCreate,
    StudentGPA,
    StudentOut,
    StudentUpdate,
)

logger = get_logger("students")

# Documents leave the service without Mongo's _id
PUBLIC_FIELDS = {"_id": 0, "name": 1, "rollNo": 1, "scores": 1}


class StudentNotFound(Exception):
    def __init__(self, roll_no: str):
        super().__init__(f"No student with rollNo {roll_no!r}")
        self.roll_no = roll_no


def compute_gpa(scores: Optional[Mapping[str, Any]]) -> str:
    """
    Mean of the five subject scores as a 2-decimal string. Always divides by
    the fixed subject count, so a missing or zero subject pulls the GPA down.
    """
    s = Scores.model_validate(dict(scores or {}))
    total = sum(getattr(s, subject) for subject in SUBJECTS)
    return f"{total / len(SUBJECTS):.2f}"


def _public(doc: Mapping[str, Any]) -> Dict[str, Any]:
    return StudentOut.model_validate(doc).model_dump()


def create_student(collection: Collection, payload: Any) -> Dict[str, Any]:
    """Validate and insert a student. Raises ValidationError / PyMongoError."""
    student = StudentCreate.model_validate(payload)
    doc = student.model_dump()
    # insert_one adds _id to the dict it is given
    collection.insert_one(dict(doc))
    logger.info("Created student rollNo=%s", student.rollNo)
    return doc


def get_student(collection: Collection, roll_no: str) -> Dict[str, Any]:
    doc = collection.find_one({"rollNo": roll_no}, PUBLIC_FIELDS)
    if doc is None:
        raise StudentNotFound(roll_no)
    return _public(doc)


def list_students(collection: Collection) -> List[Dict[str, Any]]:
    return [_public(doc) for doc in collection.find({}, PUBLIC_FIELDS)]


def list_students_with_gpa(collection: Collection) -> List[Dict[str, Any]]:
    out = []
    for doc in collection.find({}, PUBLIC_FIELDS):
        out.append(
            StudentGPA(
                name=doc["name"],
                rollNo=doc["rollNo"],
                gpa=compute_gpa(doc.get("scores")),
            ).model_dump()
        )
    return out


def update_student(collection: Collection, roll_no: str, payload: Any) -> Dict[str, Any]:
    """
    Apply the fields present in `payload` to the student with `roll_no` and
    return the document as stored after the update.
    """
    changes = StudentUpdate.model_validate(payload).to_set_document()

    if not changes:
        return get_student(collection, roll_no)

    doc = collection.find_one_and_update(
        {"rollNo": roll_no},
        {"$set": changes},
        projection=PUBLIC_FIELDS,
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise StudentNotFound(roll_no)

    logger.info("Updated student rollNo=%s fields=%s", roll_no, sorted(changes))
    return _public(doc)


def delete_student(collection: Collection, roll_no: str) -> Dict[str, Any]:
    doc = collection.find_one_and_delete({"rollNo": roll_no}, projection=PUBLIC_FIELDS)
    if doc is None:
        raise StudentNotFound(roll_no)
    logger.info("Deleted student rollNo=%s", roll_no)
    return _public(doc)
