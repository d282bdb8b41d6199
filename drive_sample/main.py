# main.py
import argparse
import logging
from typing import Iterator, List, Optional

from .config import SCOPES, Settings, get_settings
from .gdrive import GoogleDriveClient
from .gdrive_auth import authorize
from .sample import upload_to_folder, download, delete


def setup_logging():
    """Configures logging to file and console explicitly."""
    settings = get_settings()
    log_level_name = settings.LOG_LEVEL.upper()

    # Get the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level_name)

    # Clear any existing handlers to prevent duplicate logs on re-runs or implicit configs
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Add StreamHandler (for console output)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if settings.LOG_FILE:
        try:
            file_handler = logging.FileHandler(settings.LOG_FILE)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except IOError as e:
            # Log to console if file logging fails (e.g., permissions)
            root_logger.error(f"Failed to set up file logging to {settings.LOG_FILE}: {e}")

    # Reducing "noise" from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google_auth_oauthlib").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drive-sample",
        description="Upload a file into a Google Drive folder, then optionally download or delete it.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="upload",
        choices=["upload", "download", "delete"],
        help="Operation to run (default: upload).",
    )
    parser.add_argument("--file-id", help="Drive file ID for 'download' and 'delete'.")
    parser.add_argument(
        "--then-download",
        action="store_true",
        help="After uploading, download the uploaded file again.",
    )
    parser.add_argument(
        "--then-delete",
        action="store_true",
        help="After uploading, delete the uploaded file from Drive.",
    )
    parser.add_argument(
        "--no-pause", action="store_true", help="Do not wait for a key press before exiting."
    )
    return parser


def init_storage_client(settings: Settings) -> GoogleDriveClient:
    credentials = authorize(
        settings.CLIENT_SECRETS_FILE, SCOPES, settings.AUTH_USER, settings.TOKEN_STORAGE_DIR
    )
    return GoogleDriveClient(credentials, num_retries=settings.NUM_RETRIES)


def run(args: argparse.Namespace, settings: Settings, storage_client=None):
    """Runs the selected command in sequence: credentials, then the Drive calls."""
    if args.command in ("download", "delete") and not args.file_id:
        raise ValueError(f"'{args.command}' requires --file-id")

    if storage_client is None:
        storage_client = init_storage_client(settings)

    if args.command == "download":
        download(storage_client, args.file_id, settings)
    elif args.command == "delete":
        delete(storage_client, args.file_id)
    else:
        uploaded = upload_to_folder(storage_client, settings)
        if args.then_download:
            download(storage_client, uploaded.id, settings)
        if args.then_delete:
            delete(storage_client, uploaded.id)


def iter_error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yields the error followed by every error it was raised from."""
    seen = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        yield error
        error = error.__cause__


def wait_for_key():
    print("Press any key to continue...")
    try:
        input()
    except EOFError:
        pass


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit:
        # argparse has already printed the usage or help text.
        return 0
    print("Google Drive API Sample")

    settings = None
    try:
        settings = get_settings()
        setup_logging()
        run(args, settings)
    except Exception as e:
        logging.debug("Sample run failed", exc_info=True)
        for error in iter_error_chain(e):
            print(f"ERROR: {error}")

    if not args.no_pause and (settings is None or settings.PAUSE_ON_EXIT):
        wait_for_key()
    return 0


if __name__ == "__main__":
    main()
