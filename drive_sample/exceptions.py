# exceptions.py

class PermanentError(Exception):
    """An error that will not be fixed by a retry (e.g., a missing folder or bad config)."""
    pass

class TransientError(Exception):
    """A temporary error (e.g., a network failure) that might resolve on a retry."""
    pass

class FolderNotFoundError(PermanentError):
    """No folder with the configured name exists in Google Drive."""

    def __init__(self, folder_name: str):
        super().__init__(f"Folder '{folder_name}' was not found in Google Drive.")
        self.folder_name = folder_name
