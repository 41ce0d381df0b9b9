"""GitHub REST client used to list a user's public repositories."""

from typing import Any
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import UpstreamServiceError

logger = structlog.get_logger()

REPOS_PER_PAGE = 5


class GitHubClient:
    """Thin async proxy over the GitHub REST API.

    Credentials live on the server. A personal access token is preferred;
    otherwise OAuth app client credentials are sent as basic auth. Any upstream
    failure is collapsed into an UpstreamServiceError. There is no retry and no
    caching.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_client_secret,
        token: str = settings.github_token,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._token = token
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _auth(self) -> httpx.BasicAuth | None:
        if self._token or not (self._client_id and self._client_secret):
            return None
        return httpx.BasicAuth(self._client_id, self._client_secret)

    async def get_user_repos(self, username: str) -> Any:
        """Return the upstream JSON body for the user's oldest repositories."""
        url = f"{self._base_url}/users/{quote(username, safe='')}/repos"
        params = {"per_page": REPOS_PER_PAGE, "sort": "created", "direction": "asc"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(
                    url,
                    params=params,
                    headers=self._headers(),
                    auth=self._auth(),
                )
            if response.status_code != 200:
                logger.warning(
                    "github_request_failed",
                    username=username,
                    status_code=response.status_code,
                )
                raise UpstreamServiceError("GitHub")
            return response.json()
        except httpx.HTTPError as e:
            logger.error(
                "github_request_failed",
                username=username,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamServiceError("GitHub") from e
        except ValueError as e:
            logger.error("github_request_failed", username=username, error="invalid JSON body")
            raise UpstreamServiceError("GitHub") from e
