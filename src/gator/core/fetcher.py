"""Feed 文档下载."""

import logging

import httpx

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """下载 Feed 失败（HTTP 错误状态或网络错误）."""

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        if status_code is not None:
            message = f"下载 Feed 失败: HTTP {status_code} {reason} ({url})"
        else:
            message = f"下载 Feed 失败: {reason} ({url})"
        super().__init__(message)


class FeedFetcher:
    """通过 HTTP GET 获取 Feed 原文."""

    def __init__(
        self,
        user_agent: str = "gator",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        # timeout=None 时不限时，慢服务器会一直阻塞当前周期
        self._client = httpx.AsyncClient(
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def close(self) -> None:
        """关闭客户端."""
        await self._client.aclose()

    async def fetch(self, url: str) -> str:
        """下载 Feed 并返回文本内容."""
        logger.debug(f"正在下载 Feed: {url}")
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(url, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise FetchError(url, response.reason_phrase, status_code=response.status_code)

        return response.text
