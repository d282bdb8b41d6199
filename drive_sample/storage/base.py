# storage/base.py
from abc import ABC, abstractmethod
from typing import Iterator
from .dto import FileMetadata, UploadProgress, DownloadProgress


class StorageClient(ABC):
    """
    Abstract base class for a cloud storage client.
    Defines the interface the sample orchestration talks to, so the remote
    service can be swapped for a fake one in tests.
    """

    @abstractmethod
    def find_folder(self, name: str) -> FileMetadata:
        """
        Finds a folder by its exact name.

        :param name: The folder name to look up.
        :return: The metadata of the first matching folder.
        :raises FolderNotFoundError: If no folder has that name.
        """
        pass

    @abstractmethod
    def upload_file(
        self, local_path: str, folder_id: str, mime_type: str
    ) -> Iterator[UploadProgress]:
        """
        Uploads a local file into a folder, chunk by chunk.

        :param local_path: The local path of the file to upload.
        :param folder_id: The ID of the folder that becomes the file's sole parent.
        :param mime_type: The content type of the file.
        :return: An iterator of progress events. The last event has status
            COMPLETED and carries the uploaded file's metadata.
        """
        pass

    @abstractmethod
    def download_file(self, file_id: str, local_path: str) -> Iterator[DownloadProgress]:
        """
        Downloads a file from the storage.

        :param file_id: The ID of the file to download.
        :param local_path: The local path to save the file to.
        :return: An iterator of progress events, ending with COMPLETED.
        """
        pass

    @abstractmethod
    def delete_file(self, file_id: str) -> bool:
        """
        Deletes a file from the storage.

        :param file_id: The ID of the file to delete.
        :return: True if the file was deleted, False if it did not exist.
        """
        pass
