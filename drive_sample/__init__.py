"""
Google Drive API sample: upload a file into a named folder with a resumable
upload, then optionally download or delete it.
"""

__version__ = "0.1.0"
