from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(Path(ROOT_DIR) / '.env')

class Settings(BaseSettings):
    FIREBASE_CREDS_PATH: Optional[str] = None
    FIREBASE_PROJECT_ID: Optional[str] = None

    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: Optional[int] = None
    BCRYPT_ROUNDS: int = 10

    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_S3_ENDPOINT_URL: Optional[str] = None
    BUCKET_NAME: str = "myflix-frontend-aws"
    INPUT_PREFIX: str = "original-images/"
    OUTPUT_PREFIX: str = "resized-images/"
    RESIZE_WIDTH: int = 300
    RESIZE_HEIGHT: int = 300

    PORT: int = 5000
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    @property
    def FIREBASE_CREDS_PATH_ABSOLUTE(self) -> Optional[Path]:
        """Returns absolute path to Firebase credentials file"""
        if not self.FIREBASE_CREDS_PATH:
            return None
        return ROOT_DIR / self.FIREBASE_CREDS_PATH

    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
