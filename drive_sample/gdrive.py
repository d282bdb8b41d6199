# gdrive.py
import logging
import io
import ntpath
from pathlib import Path

from .storage.base import StorageClient
from .storage.dto import (
    FileMetadata,
    UploadProgress,
    UploadStatus,
    DownloadProgress,
    DownloadStatus,
)
from typing import Iterator
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseDownload, MediaIoBaseUpload
from .exceptions import FolderNotFoundError, PermanentError, TransientError

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"

KB = 0x400
# Resumable uploads must be sent in multiples of 256 KB.
MINIMUM_CHUNK_SIZE = 256 * KB
UPLOAD_CHUNK_SIZE = MINIMUM_CHUNK_SIZE * 2
DOWNLOAD_CHUNK_SIZE = 256 * KB

FILE_FIELDS = "id, name, mimeType, parents, size, webContentLink"

TRANSIENT_STATUSES = (429, 500, 502, 503, 504)


def _escape_query_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def title_from_path(local_path: str) -> str:
    """Returns the file name part of a local path, for both '/' and '\\' separators."""
    return ntpath.basename(str(local_path))


def _translate_http_error(e: HttpError, action: str) -> Exception:
    if e.resp.status in TRANSIENT_STATUSES:
        return TransientError(f"Google Drive API error while {action} ({e.resp.status}): {e}")
    return PermanentError(f"Google Drive API error while {action} ({e.resp.status}): {e}")


class GoogleDriveClient(StorageClient):
    """
    Client for interacting with the Google Drive API, implementing the StorageClient interface.
    """

    def __init__(self, credentials: Credentials, num_retries: int = 0):
        try:
            self.service = build("drive", "v3", credentials=credentials)
            self.num_retries = num_retries
            logging.info("Google Drive client initialized successfully.")
        except Exception as e:
            logging.error(f"Failed to initialize Google Drive client. Error: {e}")
            raise

    def find_folder(self, name: str) -> FileMetadata:
        """
        Retrieves a folder by its exact name.

        Folders are listed oldest first, so when several folders share the
        name the choice is stable between runs: the first one returned wins.

        Raises:
            FolderNotFoundError: If no folder has that name.
        """
        query = (
            f"mimeType = '{FOLDER_MIME_TYPE}' and "
            f"name = '{_escape_query_value(name)}'"
        )
        logging.info(f"Looking up Google Drive folder '{name}'...")
        page_token = None
        while True:
            try:
                response = (
                    self.service.files()
                    .list(
                        q=query,
                        spaces="drive",
                        orderBy="createdTime",
                        fields=f"nextPageToken, files({FILE_FIELDS})",
                        pageToken=page_token,
                    )
                    .execute(num_retries=self.num_retries)
                )
            except HttpError as e:
                logging.error(f"Failed to search for folder '{name}': {e}")
                raise _translate_http_error(e, f"searching for folder '{name}'") from e

            files = response.get("files", [])
            if files:
                if len(files) > 1:
                    logging.warning(
                        f"Found {len(files)} folders named '{name}'. Using the first one (ID: {files[0]['id']})."
                    )
                return FileMetadata.from_api(files[0])

            # Drive may return an empty page with a token when the search is incomplete.
            page_token = response.get("nextPageToken")
            if not page_token:
                raise FolderNotFoundError(name)

    def upload_file(
        self, local_path: str, folder_id: str, mime_type: str
    ) -> Iterator[UploadProgress]:
        """
        Uploads a local file into a folder in Google Drive using a resumable upload.

        This is a generator: nothing is opened or sent until the first event is
        requested. The local file is closed once the generator finishes, fails,
        or is closed by the caller.
        """
        body = {
            "name": title_from_path(local_path),
            "mimeType": mime_type,
            "parents": [folder_id],
        }

        upload_stream = open(local_path, "rb")
        try:
            media = MediaIoBaseUpload(
                upload_stream, mimetype=mime_type, chunksize=UPLOAD_CHUNK_SIZE, resumable=True
            )
            total_bytes = media.size()
            logging.info(
                f"Uploading {local_path} ({total_bytes} bytes) to folder ID {folder_id} with name {body['name']}..."
            )
            request = self.service.files().create(
                body=body, media_body=media, fields=FILE_FIELDS
            )
            yield UploadProgress(
                status=UploadStatus.STARTING, bytes_sent=0, total_bytes=total_bytes
            )

            bytes_sent = 0
            response = None
            while response is None:
                try:
                    status, response = request.next_chunk(num_retries=self.num_retries)
                except HttpError as e:
                    logging.error(
                        f"Failed to upload file to folder ID '{folder_id}' after {bytes_sent} bytes: {e}"
                    )
                    raise _translate_http_error(e, f"uploading '{body['name']}'") from e
                if status is not None and status.resumable_progress > bytes_sent:
                    bytes_sent = status.resumable_progress
                    yield UploadProgress(
                        status=UploadStatus.UPLOADING,
                        bytes_sent=bytes_sent,
                        total_bytes=total_bytes,
                    )

            uploaded = FileMetadata.from_api(response)
            logging.info(f"Successfully uploaded {uploaded.name} (ID: {uploaded.id}).")
            yield UploadProgress(
                status=UploadStatus.COMPLETED,
                bytes_sent=max(bytes_sent, total_bytes),
                total_bytes=total_bytes,
                file=uploaded,
            )
        finally:
            logging.debug("Closing the stream")
            upload_stream.close()
            logging.debug("The stream was closed")

    def download_file(self, file_id: str, local_path: str) -> Iterator[DownloadProgress]:
        """
        Downloads a file from Google Drive to the local filesystem using its file ID.
        """
        logging.info(f"Downloading file with ID '{file_id}' to {local_path}...")
        request = self.service.files().get_media(fileId=file_id)
        try:
            with io.FileIO(str(local_path), "wb") as fh:
                downloader = MediaIoBaseDownload(fh, request, chunksize=DOWNLOAD_CHUNK_SIZE)
                done = False
                while not done:
                    try:
                        status, done = downloader.next_chunk(num_retries=self.num_retries)
                    except HttpError as e:
                        # Check if the error is due to file not found (e.g., 404)
                        if e.resp.status == 404:
                            raise FileNotFoundError(
                                f"File with ID '{file_id}' not found in Google Drive."
                            ) from e
                        logging.error(f"Failed to download file with ID '{file_id}': {e}")
                        raise _translate_http_error(e, f"downloading '{file_id}'") from e
                    yield DownloadProgress(
                        status=DownloadStatus.COMPLETED if done else DownloadStatus.DOWNLOADING,
                        bytes_downloaded=status.resumable_progress,
                        total_bytes=status.total_size,
                    )
        except FileNotFoundError:
            # Nothing was downloaded, so do not leave an empty file behind.
            Path(local_path).unlink(missing_ok=True)
            raise

    def delete_file(self, file_id: str) -> bool:
        """
        Deletes a file from Google Drive by its file ID.
        Returns False when the file does not exist.
        """
        try:
            logging.info(f"Deleting file with ID '{file_id}'...")
            self.service.files().delete(fileId=file_id).execute(
                num_retries=self.num_retries
            )
            return True
        except HttpError as e:
            if e.resp.status == 404:
                logging.warning(
                    f"File with ID '{file_id}' not found. Nothing to delete."
                )
                return False
            logging.error(f"Failed to delete file with ID '{file_id}': {e}")
            raise _translate_http_error(e, f"deleting '{file_id}'") from e
