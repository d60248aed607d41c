import logging

import httpx

from jobtracker.client.board import BoardState, ChangeState
from jobtracker.models.enums import ApplicationStatus
from jobtracker.schemas.application import ApplicationResponse

logger = logging.getLogger(__name__)


class TrackerClient:
    """Thin HTTP client for the tracker API."""

    def __init__(self, base_url: str, token: str | None = None, transport: httpx.BaseTransport | None = None,
                 api_prefix: str = "/api", timeout: float = 10.0):
        self._prefix = api_prefix
        self._client = httpx.Client(base_url=base_url, transport=transport, timeout=timeout)
        self._token = token

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"} if self._token else {}

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        return self._client.request(method, f"{self._prefix}{path}", headers=self._headers(), **kwargs)

    def sign_in(self, username: str, password: str) -> str:
        r = self._request("POST", "/auth/signin", json={"username": username, "password": password})
        r.raise_for_status()
        self._token = r.json()["token"]
        return self._token

    def list_applications(self) -> list[ApplicationResponse]:
        r = self._request("GET", "/applications")
        r.raise_for_status()
        return [ApplicationResponse.model_validate(a) for a in r.json()["applications"]]

    def load_board(self) -> BoardState:
        return BoardState(self.list_applications())

    def update_status(self, application_id: str, status: ApplicationStatus) -> httpx.Response:
        return self._request(
            "PATCH",
            f"/applications/{application_id}/status",
            json={"status": ApplicationStatus(status).value},
        )

    def move_application(self, board: BoardState, application_id: str, status: ApplicationStatus) -> ChangeState:
        """Move a card optimistically, then commit or roll back on the server's answer."""
        board.move(application_id, status)
        try:
            r = self.update_status(application_id, status)
        except httpx.HTTPError as exc:
            board.rollback(application_id)
            logger.error("Error updating application status for %s: %s", application_id, exc)
            return ChangeState.ROLLED_BACK

        if r.status_code != 200:
            board.rollback(application_id)
            logger.error(
                "Failed to update application status for %s: %s %s",
                application_id, r.status_code, r.text,
            )
            return ChangeState.ROLLED_BACK

        board.commit(application_id, ApplicationResponse.model_validate(r.json()))
        return ChangeState.COMMITTED
