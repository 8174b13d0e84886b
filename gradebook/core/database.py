# gradebook/core/database.py
from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection

from gradebook.core.config import Settings
from gradebook.core.logger import get_logger

logger = get_logger("database")

ROLLNO_INDEX = "rollNo_1"


def connect(settings: Settings) -> MongoClient:
    client = MongoClient(settings.MONGO_URI)
    logger.info("Connected to MongoDB at %s", settings.MONGO_URI)
    return client


def students_collection(client: MongoClient, settings: Settings) -> Collection:
    return client[settings.DB_NAME][settings.COLLECTION]


def ensure_indexes(collection: Collection, settings: Settings) -> None:
    """
    Index rollNo. An existing rollNo_1 whose unique option differs from the
    setting is dropped and rebuilt. Building a unique index over a collection
    that already holds duplicate rollNos raises DuplicateKeyError.
    """
    unique = settings.ENFORCE_UNIQUE_ROLLNO
    existing = collection.index_information().get(ROLLNO_INDEX)
    if existing is not None and bool(existing.get("unique", False)) != unique:
        logger.warning("Rebuilding %s with unique=%s", ROLLNO_INDEX, unique)
        collection.drop_index(ROLLNO_INDEX)

    collection.create_index(
        [("rollNo", ASCENDING)],
        name=ROLLNO_INDEX,
        unique=unique,
    )
    logger.info(
        "Ensured rollNo index on %s.%s (unique=%s)",
        settings.DB_NAME,
        settings.COLLECTION,
        settings.ENFORCE_UNIQUE_ROLLNO,
    )


def get_students(request: Request) -> Collection:
    """FastAPI dependency: the students collection owned by this app instance."""
    return request.app.state.students
