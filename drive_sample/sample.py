# sample.py
import logging
from pathlib import Path
from typing import Optional

from .config import Settings
from .storage.base import StorageClient
from .storage.dto import FileMetadata, UploadStatus, DownloadStatus
from .exceptions import PermanentError


def upload_to_folder(storage_client: StorageClient, settings: Settings) -> FileMetadata:
    """
    Uploads the configured file into the configured Drive folder and returns
    the metadata Drive assigned to it.
    """
    folder = storage_client.find_folder(settings.FOLDER_NAME)
    logging.info(f"Uploading into folder '{folder.name}' (ID: {folder.id}).")

    uploaded: Optional[FileMetadata] = None
    try:
        for progress in storage_client.upload_file(
            settings.UPLOAD_FILE_NAME, folder.id, settings.CONTENT_TYPE
        ):
            print(f"{progress.status.value} {progress.bytes_sent}")
            if progress.status is UploadStatus.COMPLETED:
                uploaded = progress.file
    except Exception as e:
        logging.error(f"Upload failed. {e}")
        raise

    if uploaded is None:
        raise PermanentError("Upload finished without a response from Google Drive.")

    print(f'"{uploaded.name}" was uploaded successfully')
    return uploaded


def download_path_for(settings: Settings) -> Path:
    """Builds '<download dir>/Download<.ext>' using the upload file's extension."""
    suffix = Path(settings.UPLOAD_FILE_NAME.replace("\\", "/")).suffix
    return Path(settings.DOWNLOAD_DIRECTORY) / f"Download{suffix}"


def download(storage_client: StorageClient, file_id: str, settings: Settings) -> Path:
    local_path = download_path_for(settings)
    bytes_downloaded = 0
    try:
        for progress in storage_client.download_file(file_id, str(local_path)):
            bytes_downloaded = progress.bytes_downloaded
            print(f"{progress.status.value} {progress.bytes_downloaded}")
            if progress.status is DownloadStatus.COMPLETED:
                print(f"{local_path} was downloaded successfully")
    except FileNotFoundError:
        raise
    except Exception:
        logging.error(
            f"Download {local_path} was interrupted in the middle. Only {bytes_downloaded} were downloaded."
        )
        raise
    return local_path


def delete(storage_client: StorageClient, file_id: str):
    print(f"Deleting file '{file_id}'...")
    if storage_client.delete_file(file_id):
        print("File was deleted successfully")
    else:
        print(f"File '{file_id}' was not found, nothing deleted")
