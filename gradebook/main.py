# gradebook/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from gradebook import __version__
from gradebook.core import database
from gradebook.core.config import CONFIG, Settings
from gradebook.core.logger import get_logger
from gradebook.routes.root import router as root_router
from gradebook.routes.student_routes import router as student_router

logger = get_logger("app")


def create_app(settings: Settings | None = None, mongo_client: MongoClient | None = None) -> FastAPI:
    """
    Build the service. Pass `mongo_client` to reuse an existing client; it is
    then left open on shutdown. Otherwise the app connects on startup and
    closes its own client on shutdown.
    """
    settings = settings or CONFIG

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = mongo_client is None
        client = database.connect(settings) if owned else mongo_client
        students = database.students_collection(client, settings)
        try:
            database.ensure_indexes(students, settings)
        except PyMongoError:
            # Requests report the outage themselves; keep serving
            logger.exception("Could not ensure indexes; continuing without them")

        app.state.mongo = client
        app.state.students = students
        logger.info("Student records service ready")
        try:
            yield
        finally:
            if owned:
                client.close()
                logger.info("MongoDB connection closed")

    app = FastAPI(
        title="Student Gradebook",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        # Bodies that are not JSON at all; schema errors are handled per route
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body", "error": jsonable_encoder(exc.errors())},
        )

    app.include_router(student_router)
    # Catch-all GET; must be registered last
    app.include_router(root_router)

    return app


app = create_app()
