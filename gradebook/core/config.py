# gradebook/core/config.py

from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # Level of the "gradebook" logger
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    DB_NAME: str = "studentDB"
    COLLECTION: str = "students"

    # rollNo is the lookup key for every point operation
    ENFORCE_UNIQUE_ROLLNO: bool = True

    # Browser client
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    CLIENT_BUILD_DIR: str = "client/build"

    # uvicorn
    HOST: str = "127.0.0.1"
    PORT: int = 4000

    # Used by gradebook.client when talking to a running service
    API_BASE_URL: str = "http://localhost:4000"

    class Config:
        env_prefix = "GRADEBOOK_"
        case_sensitive = False


CONFIG = Settings()
