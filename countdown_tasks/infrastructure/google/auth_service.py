from __future__ import annotations

import logging
import os

import google_auth_httplib2
import httplib2
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from countdown_tasks.config import CREDENTIALS_FILE, REQUEST_TIMEOUT_SECONDS, TOKEN_FILE
from countdown_tasks.domain.errors import AuthRequiredError


logger = logging.getLogger(__name__)


class GoogleAuthService:
    SCOPES = ["https://www.googleapis.com/auth/datastore"]

    def __init__(
        self,
        credentials_path: str | None = None,
        token_path: str | None = None,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
    ):
        self.credentials_path = credentials_path or CREDENTIALS_FILE
        self.token_path = token_path or TOKEN_FILE
        self.timeout_seconds = timeout_seconds
        self._service = None

    def is_available(self) -> bool:
        return os.path.exists(self.credentials_path)

    def authenticate(self) -> bool:
        """Authenticate using stored/refreshable credentials only.

        Raises:
            AuthRequiredError: When credentials are missing or cannot be
                refreshed and interactive re-authentication is required.
        """
        if not self.is_available():
            logger.error("credentials.json is missing; Firestore is unavailable.")
            return False

        try:
            creds = None
            if os.path.exists(self.token_path):
                creds = Credentials.from_authorized_user_file(self.token_path, self.SCOPES)

            if not creds or not creds.valid:
                if creds and creds.expired and creds.refresh_token:
                    creds.refresh(Request())
                else:
                    # Never open a browser implicitly; the caller decides.
                    raise AuthRequiredError()

                self._save_token(creds)

            self._activate(creds)
            return True
        except AuthRequiredError:
            raise
        except Exception:
            logger.exception("Google OAuth authentication failed.")
            return False

    def run_interactive_auth(self) -> bool:
        """Run the full OAuth browser flow. Call only from the UI thread."""
        if not self.is_available():
            return False

        try:
            flow = InstalledAppFlow.from_client_secrets_file(self.credentials_path, self.SCOPES)
            creds = flow.run_local_server(port=0)
            self._save_token(creds)
            self._activate(creds)
            return True
        except Exception:
            logger.exception("Interactive Google OAuth authentication failed.")
            return False

    def get_service(self):
        if self._service is not None:
            return self._service

        if not self.authenticate():
            return None
        return self._service

    def _save_token(self, creds) -> None:
        with open(self.token_path, "w", encoding="utf-8") as file:
            file.write(creds.to_json())

    def _activate(self, creds) -> None:
        # A bounded transport turns a hung request into a socket timeout.
        http = google_auth_httplib2.AuthorizedHttp(creds, http=httplib2.Http(timeout=self.timeout_seconds))
        self._service = build("firestore", "v1", http=http, cache_discovery=False)
