# storage/dto.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class FileMetadata(BaseModel):
    """
    A standardized Data Transfer Object for file metadata to abstract away
    provider-specific file representations.
    """

    id: str
    name: str
    mime_type: Optional[str] = None
    parents: List[str] = Field(default_factory=list)
    size: Optional[int] = None
    web_content_link: Optional[str] = None

    @classmethod
    def from_api(cls, item: dict) -> "FileMetadata":
        """Builds the DTO from a Drive v3 `files` resource."""
        size = item.get("size")
        return cls(
            id=item["id"],
            name=item.get("name", ""),
            mime_type=item.get("mimeType"),
            parents=item.get("parents", []),
            size=int(size) if size is not None else None,
            web_content_link=item.get("webContentLink"),
        )


class UploadStatus(str, Enum):
    STARTING = "Starting"
    UPLOADING = "Uploading"
    COMPLETED = "Completed"


class DownloadStatus(str, Enum):
    DOWNLOADING = "Downloading"
    COMPLETED = "Completed"


class UploadProgress(BaseModel):
    status: UploadStatus
    bytes_sent: int = 0
    total_bytes: Optional[int] = None
    # Only set on the terminal COMPLETED event.
    file: Optional[FileMetadata] = None


class DownloadProgress(BaseModel):
    status: DownloadStatus
    bytes_downloaded: int = 0
    total_bytes: Optional[int] = None
