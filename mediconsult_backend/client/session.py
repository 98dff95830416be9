"""
HTTP session for the MediConsult API.

An ``ApiSession`` holds the base URL and the bearer token for one signed-in
doctor; there is no module-level state, so several sessions can coexist.
"""

import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx answer (or transport failure, status 0) from the API."""

    def __init__(self, status: int, message: str, payload=None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.payload = payload


class ApiSession:
    def __init__(self, base_url: str, token: str | None = None, timeout: float = 10, http=None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.refresh_token = None
        self.user = None
        self.timeout = timeout
        self.http = http or requests.Session()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, *, json=None, params=None, auth: bool = True):
        """Send a request and return the decoded JSON body.

        Raises ApiError with the server's ``message`` for error responses.
        """
        headers = {}
        if auth and self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.http.request(
                method,
                self.url(path),
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(0, f"Request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise ApiError(response.status_code, message or response.reason or "Request failed", payload)
        return payload

    def get(self, path: str, **params):
        return self.request("GET", path, params=params or None)

    def post(self, path: str, json=None):
        return self.request("POST", path, json=json)

    def put(self, path: str, json=None):
        return self.request("PUT", path, json=json)

    def delete(self, path: str):
        return self.request("DELETE", path)

    # -- auth ---------------------------------------------------------------

    def register(self, **fields) -> dict:
        return self.request("POST", "/api/auth/register/", json=fields, auth=False)

    def verify_email(self, token: str) -> dict:
        return self.request("POST", "/api/auth/verify-email/", json={"token": token}, auth=False)

    def resend_verification(self, email: str) -> dict:
        return self.request("POST", "/api/auth/resend-verification/", json={"email": email}, auth=False)

    def login(self, email: str, password: str) -> dict:
        data = self.request(
            "POST",
            "/api/auth/login/",
            json={"email": email, "password": password},
            auth=False,
        )
        self.token = data["access"]
        self.refresh_token = data.get("refresh")
        self.user = data.get("user")
        return self.user

    def logout(self) -> None:
        self.token = None
        self.refresh_token = None
        self.user = None
