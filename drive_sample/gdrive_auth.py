# gdrive_auth.py
import os
import json
import logging
from pathlib import Path
from typing import List
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from .exceptions import PermanentError


def token_path_for(token_dir, user: str) -> Path:
    return Path(token_dir) / f"token-{user}.json"


def authorize(
    client_secrets_file, scopes: List[str], user: str, token_dir
) -> Credentials:
    """
    Handles the OAuth 2.0 flow for Google Drive API.
    Reuses the token stored for `user` under `token_dir` when it is still valid,
    refreshes it when it has expired, and otherwise runs the installed-app flow
    in the browser. The resulting token is saved for the next run.
    """
    creds = None
    token_path = token_path_for(token_dir, user)

    # Check if a token file already exists
    if os.path.exists(token_path):
        with open(token_path, "r") as token_file:
            creds_data = json.load(token_file)
        creds = Credentials.from_authorized_user_info(creds_data, scopes)

    if creds and creds.valid:
        logging.info(f"Using stored Google Drive token for '{user}'.")
        return creds

    # If there are no (valid) credentials available, let the user log in.
    if creds and creds.expired and creds.refresh_token:
        logging.info("Stored Google Drive token has expired. Refreshing...")
        creds.refresh(Request())
    else:
        if not os.path.exists(client_secrets_file):
            raise PermanentError(
                f"Client secrets file '{client_secrets_file}' not found. "
                "Download your OAuth 2.0 client from the Google Cloud Console."
            )
        flow = InstalledAppFlow.from_client_secrets_file(str(client_secrets_file), scopes)
        creds = flow.run_local_server(port=0)

    # Save the credentials for the next run
    os.makedirs(token_dir, exist_ok=True)
    with open(token_path, "w") as token_file:
        token_file.write(creds.to_json())
    logging.info(f"Token saved to {token_path}")
    return creds
