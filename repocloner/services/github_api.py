"""
GitHub API service for listing the repositories owned by the caller.
"""

from typing import Any, Dict, List, Optional

import httpx

from ..models import ClonerConfig, RepositoryRecord
from ..infrastructure.error_handler import TransportError, handle_api_error
from repocloner.infrastructure.logger import logger


class GitHubAPIService:
    """Thin async client around the `/user/repos` listing endpoint."""

    def __init__(
        self,
        token: str,
        config: Optional[ClonerConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.token = token
        self.config = config or ClonerConfig()
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "User-Agent": self.config.user_agent,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.api_base_url,
            headers=self._headers(),
            timeout=self.config.timeout,
            transport=self._transport,
        )

    @handle_api_error
    async def list_repositories(self) -> List[RepositoryRecord]:
        """
        Fetch every repository owned by the authenticated user.

        Pages through the listing until an empty page is returned. Any failed
        page aborts the whole listing; no partial results are returned.

        Returns:
            Repository records in the order GitHub returned them

        Raises:
            TransportError: If any page request fails
        """
        repositories: List[RepositoryRecord] = []
        page = 1

        async with self._client() as client:
            while True:
                batch = await self._fetch_page(client, page)
                if not batch:
                    break

                repositories.extend(RepositoryRecord.from_api(item) for item in batch)
                logger.debug(f"Fetched page {page} ({len(batch)} repositories)")
                page += 1

        logger.debug(f"Listed {len(repositories)} repositories in {page - 1} page(s)")
        return repositories

    async def _fetch_page(self, client: httpx.AsyncClient, page: int) -> List[Dict[str, Any]]:
        params = {
            "visibility": "all",
            "affiliation": "owner",
            "per_page": self.config.per_page,
            "page": page,
        }
        response = await client.get("/user/repos", params=params)
        response.raise_for_status()

        batch = response.json()
        if not isinstance(batch, list):
            raise TransportError(
                f"Unexpected payload for page {page}: expected a list",
                status_code=response.status_code,
            )
        return batch


__all__ = [
    "GitHubAPIService",
]
