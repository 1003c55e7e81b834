from typing import Any, Generic, Protocol, TypeVar

import httpx

from ._logging import logger
from .config import DEFAULT_BASE_URL
from .exceptions import handle_decode_errors, handle_http_errors
from .models import CollectionResponse, Item
from .pagination import ResultPage

T = TypeVar("T", bound=Item)
T_co = TypeVar("T_co", covariant=True)


class PageSource(Protocol[T_co]):
    """
    Anything that can fetch one page of a collection.

    Implementations raise NetworkFailure or DecodeFailure on failure and
    return an empty ResultPage at the end of the collection.
    """

    async def fetch_page(self, page: int, page_size: int) -> ResultPage[T_co]: ...

    async def aclose(self) -> None: ...


class HttpPageSource(Generic[T]):
    """
    Page source backed by an HTTP endpoint answering
    ``GET <base_url>?results=<page_size>&page=<page>`` with
    ``{"results": [...], "info": {"page": n}}``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        item_model: type[T] = Item,  # type: ignore[assignment]
        *,
        page_param: str = "page",
        size_param: str = "results",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.base_url = base_url
        self.item_model = item_model
        self.page_param = page_param
        self.size_param = size_param
        self.timeout = timeout
        self.headers = headers or {}

        # Only a client we created ourselves is closed in aclose()
        self._client = client
        self._owns_client = client is None
        self._envelope = CollectionResponse[item_model]  # type: ignore[valid-type]

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={"Accept": "application/json", **self.headers},
            )
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this source created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    def build_params(self, page: int, page_size: int) -> dict[str, Any]:
        return {self.size_param: page_size, self.page_param: page}

    async def fetch_page(self, page: int, page_size: int) -> ResultPage[T]:
        """
        Fetch one page.

        Raises:
            NetworkFailure: Transport error, timeout or non-2xx status
            DecodeFailure: Body is not a valid paginated collection
        """
        client = await self._get_client()
        params = self.build_params(page, page_size)

        logger.debug(
            "Requesting page",
            extra={"url": self.base_url, "page": page, "page_size": page_size},
        )

        with handle_http_errors(url=self.base_url):
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()

        with handle_decode_errors(page=page):
            body = self._envelope.model_validate_json(response.content)

        if body.info.page != page:
            logger.debug(
                "Server reported a different page index",
                extra={"page": page, "reported_page": body.info.page},
            )

        return ResultPage(items=tuple(body.results), page=page)
