"""HTTP fetcher for feed documents."""

from typing import Optional

import httpx

from ..exceptions import FetchError


class FeedFetcher:
    """Fetch raw feed bytes."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = "feedwatch/0.1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize feed fetcher."""
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport

    async def fetch(self, url: str) -> bytes:
        """Fetch a feed URL and return the response body.

        Raises:
            FetchError: on network errors, timeouts and non-2xx responses
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.content
        except httpx.TimeoutException as e:
            raise FetchError(url, f"timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise FetchError(
                url, f"HTTP {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.InvalidURL as e:
            raise FetchError(url, f"invalid URL: {e}") from e
        except httpx.HTTPError as e:
            raise FetchError(url, f"HTTP error: {e}") from e
