import csv
import io

from pydantic import ValidationError
from pymongo.collection import Collection

from gradebook.core.logger import get_logger
from gradebook.models.student_schemas import SUBJECTS, StudentCreate

logger = get_logger("ingest")


def import_students_csv(collection: Collection, file_content: bytes) -> dict:
    """
    Parses a CSV of students and upserts each row by rollNo.
    Expected headers: name, rollNo, Java, CPP, Python, GenAI, FSD
    Blank subject cells count as 0.
    """
    decoded = file_content.decode("utf-8-sig")
    reader = csv.DictReader(io.StringIO(decoded))

    records_processed = 0
    skipped = 0

    for line_no, row in enumerate(reader, start=2):
        # 1. Extract and clean row data
        name = (row.get("name") or "").strip()
        roll_no = (row.get("rollNo") or "").strip()

        try:
            scores = {
                subject: int((row.get(subject) or "0").strip() or 0)
                for subject in SUBJECTS
            }
            student = StudentCreate(name=name, rollNo=roll_no, scores=scores)
        except (ValueError, ValidationError) as e:
            # ValidationError subclasses ValueError; both mean a bad row
            logger.warning("Skipping CSV line %d: %s", line_no, e)
            skipped += 1
            continue

        # 2. Upsert by rollNo
        collection.update_one(
            {"rollNo": student.rollNo},
            {"$set": student.model_dump()},
            upsert=True,
        )
        records_processed += 1

    logger.info("CSV import done: %d upserted, %d skipped", records_processed, skipped)
    return {
        "status": "success",
        "records_processed": records_processed,
        "skipped": skipped,
    }
