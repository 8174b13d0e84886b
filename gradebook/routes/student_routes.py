from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from gradebook.core.database import get_students
from gradebook.core.logger import get_logger
from gradebook.services import student_service
from gradebook.services.student_service import StudentNotFound

logger = get_logger("routes")

router = APIRouter(tags=["Students"])

NOT_FOUND = {"message": "Student not found"}


def _error(status_code: int, message: str, exc: Exception) -> JSONResponse:
    if isinstance(exc, ValidationError):
        detail = jsonable_encoder(exc.errors(include_url=False, include_context=False))
    elif isinstance(exc, DuplicateKeyError):
        detail = "A student with this rollNo already exists"
    else:
        detail = str(exc)
    return JSONResponse(status_code=status_code, content={"message": message, "error": detail})


@router.post("/", status_code=201)
def add_student(payload: Any = Body(None), students: Collection = Depends(get_students)):
    """Insert a new student. Omitted subjects default to 0."""
    try:
        student = student_service.create_student(students, payload)
    except (ValidationError, DuplicateKeyError) as e:
        return _error(400, "Failed to add student", e)
    except PyMongoError as e:
        logger.exception("Insert failed")
        return _error(400, "Failed to add student", e)
    return {"message": "Student added successfully", "student": student}


@router.put("/student/{roll_no}")
def update_student(
    roll_no: str,
    payload: Any = Body(None),
    students: Collection = Depends(get_students),
):
    try:
        updated = student_service.update_student(students, roll_no, payload)
    except StudentNotFound:
        logger.info("Update: rollNo=%s not found", roll_no)
        return JSONResponse(status_code=404, content=NOT_FOUND)
    except (ValidationError, DuplicateKeyError) as e:
        return _error(400, "Failed to update student", e)
    except PyMongoError as e:
        logger.exception("Update failed for rollNo=%s", roll_no)
        return _error(400, "Failed to update student", e)
    return {"message": "Student updated successfully", "updatedStudent": updated}


@router.delete("/student/{roll_no}")
def delete_student(roll_no: str, students: Collection = Depends(get_students)):
    try:
        deleted = student_service.delete_student(students, roll_no)
    except StudentNotFound:
        logger.info("Delete: rollNo=%s not found", roll_no)
        return JSONResponse(status_code=404, content=NOT_FOUND)
    except PyMongoError as e:
        # 400 here (not 500) is what existing clients see for this route
        logger.exception("Delete failed for rollNo=%s", roll_no)
        return _error(400, "Failed to delete student", e)
    return {"message": "Student deleted successfully", "deletedStudent": deleted}


@router.get("/studentsGPA")
def students_gpa(students: Collection = Depends(get_students)):
    """All students with their GPA instead of per-subject scores."""
    try:
        return student_service.list_students_with_gpa(students)
    except PyMongoError as e:
        # Same status quirk as delete
        logger.exception("GPA listing failed")
        return _error(400, "Failed to fetch students", e)


@router.get("/student/{roll_no}")
def get_student(roll_no: str, students: Collection = Depends(get_students)):
    try:
        return student_service.get_student(students, roll_no)
    except StudentNotFound:
        logger.info("Lookup: rollNo=%s not found", roll_no)
        return JSONResponse(status_code=404, content=NOT_FOUND)
    except PyMongoError as e:
        logger.exception("Lookup failed for rollNo=%s", roll_no)
        return _error(500, "Error fetching student data", e)


@router.get("/allStudents")
def all_students(students: Collection = Depends(get_students)):
    try:
        return student_service.list_students(students)
    except PyMongoError as e:
        logger.exception("Listing failed")
        return _error(500, "Failed to fetch students", e)
