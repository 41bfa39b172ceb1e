import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = "Virtual Teaching Assistant Sandbox"
    PROJECT_VERSION: str = "1.0.0"

    # HTTP settings
    PORT: int = int(os.getenv("PORT", "5000"))
    CORS_ORIGINS: list[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    # request bodies are capped at 10mb
    MAX_SOURCE_BYTES: int = int(os.getenv("MAX_SOURCE_BYTES", str(10 * 1024 * 1024)))

    # execution settings
    SCRATCH_DIR: str = os.getenv("SCRATCH_DIR", "./temp")
    EXECUTION_TIMEOUT_SECONDS: float = float(os.getenv("EXECUTION_TIMEOUT_SECONDS", "5"))
    KILL_GRACE_SECONDS: float = float(os.getenv("KILL_GRACE_SECONDS", "0.5"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
