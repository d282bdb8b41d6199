import re
from pathlib import Path
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from functools import lru_cache

# The Drive API scopes.
SCOPES = [
    "https://www.googleapis.com/auth/drive.file",
    "https://www.googleapis.com/auth/drive",
]

_MIME_TYPE_RE = re.compile(r"^[\w.+-]+/[\w.+-]+$")


class Settings(BaseSettings):
    """
    Centralized application configuration with type validation.
    Automatically reads variables from the environment and the .env file.
    The defaults are the values the original console sample had compiled in.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # --- Upload Settings ---
    UPLOAD_FILE_NAME: str = "Desert.jpg"
    CONTENT_TYPE: str = "image/jpeg"
    FOLDER_NAME: str = "LIVROS"

    # --- Download Settings ---
    DOWNLOAD_DIRECTORY: Path = Path(".")

    # --- Google Drive Auth Settings ---
    CLIENT_SECRETS_FILE: Path = Path("client_secrets.json")
    TOKEN_STORAGE_DIR: Path = Path.home() / ".credentials" / "Drive.Sample"
    AUTH_USER: str = "user"

    # --- General Settings ---
    NUM_RETRIES: int = 3
    PAUSE_ON_EXIT: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[Path] = None

    @model_validator(mode="after")
    def validate_sample_settings(self):
        if not self.UPLOAD_FILE_NAME.strip():
            raise ValueError("UPLOAD_FILE_NAME cannot be empty")
        if not self.FOLDER_NAME.strip():
            raise ValueError("FOLDER_NAME cannot be empty")
        if not _MIME_TYPE_RE.match(self.CONTENT_TYPE):
            raise ValueError(
                f"CONTENT_TYPE must look like 'type/subtype', got '{self.CONTENT_TYPE}'"
            )
        if self.NUM_RETRIES < 0:
            raise ValueError("NUM_RETRIES cannot be negative")
        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    The first call to this function will initialize the settings.
    """
    return Settings()
