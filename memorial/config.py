import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Settings:
    def __init__(self):
        self.DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./memorial.db")
        self.HOST = os.getenv("HOST", "0.0.0.0")
        self.PORT = int(os.getenv("PORT", 3001))
        self.APP_ENV = os.getenv("APP_ENV", "development")
        self.DEBUG = os.getenv("DEBUG", "False").lower() == "true"
        self.APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
        self.UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "uploads"))
        self.CLIENT_BUILD_DIR = Path(os.getenv("CLIENT_BUILD_DIR", "build"))
        self.CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
        self.MEMORIAL_BACKEND = os.getenv("MEMORIAL_BACKEND", "api")
        self.MEMORIAL_API_URL = os.getenv("MEMORIAL_API_URL", "http://localhost:3001")

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"


settings = Settings()
