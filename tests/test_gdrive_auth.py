# tests/test_gdrive_auth.py
import json
import pytest
from unittest.mock import patch, MagicMock

from drive_sample.gdrive_auth import authorize, token_path_for
from drive_sample.exceptions import PermanentError

SCOPES = ["https://www.googleapis.com/auth/drive"]


@pytest.fixture
def client_secrets(tmp_path):
    path = tmp_path / "client_secrets.json"
    path.write_text(json.dumps({"installed": {"client_id": "id", "client_secret": "secret"}}))
    return path


@patch("drive_sample.gdrive_auth.InstalledAppFlow.from_client_secrets_file")
def test_authorize_new_token(mock_flow, tmp_path, client_secrets):
    """Test the authentication process when no token exists."""
    token_dir = tmp_path / "Drive.Sample"
    mock_creds = MagicMock()
    mock_creds.to_json.return_value = "mock_json_token"
    mock_flow.return_value.run_local_server.return_value = mock_creds

    creds = authorize(client_secrets, SCOPES, "user", token_dir)

    assert creds is mock_creds
    mock_flow.assert_called_once_with(str(client_secrets), SCOPES)
    mock_flow.return_value.run_local_server.assert_called_once_with(port=0)
    assert token_path_for(token_dir, "user").read_text() == "mock_json_token"


@patch("drive_sample.gdrive_auth.InstalledAppFlow.from_client_secrets_file")
@patch("drive_sample.gdrive_auth.Credentials.from_authorized_user_info")
def test_authorize_existing_token(mock_creds_from_info, mock_flow, tmp_path, client_secrets):
    """Test the authentication process when a valid token already exists."""
    token_path = token_path_for(tmp_path, "user")
    token_path.write_text("{}")
    mock_creds = MagicMock(valid=True)
    mock_creds_from_info.return_value = mock_creds

    creds = authorize(client_secrets, SCOPES, "user", tmp_path)

    assert creds is mock_creds
    mock_creds_from_info.assert_called_once_with({}, SCOPES)
    mock_creds.refresh.assert_not_called()
    mock_flow.assert_not_called()


@patch("drive_sample.gdrive_auth.Request")
@patch("drive_sample.gdrive_auth.Credentials.from_authorized_user_info")
def test_authorize_refreshes_expired_token(mock_creds_from_info, MockRequest, tmp_path, client_secrets):
    token_path = token_path_for(tmp_path, "user")
    token_path.write_text("{}")
    mock_creds = MagicMock(valid=False, expired=True, refresh_token="refresh")
    mock_creds.to_json.return_value = "refreshed_token"
    mock_creds_from_info.return_value = mock_creds

    authorize(client_secrets, SCOPES, "user", tmp_path)

    mock_creds.refresh.assert_called_once_with(MockRequest.return_value)
    assert token_path.read_text() == "refreshed_token"


def test_authorize_missing_client_secrets_raises(tmp_path):
    with pytest.raises(PermanentError, match="Client secrets file"):
        authorize(tmp_path / "missing.json", SCOPES, "user", tmp_path)


def test_token_path_is_per_user(tmp_path):
    assert token_path_for(tmp_path, "alice").name == "token-alice.json"
