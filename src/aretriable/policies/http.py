r"""Policy retrying transient HTTP failures raised by ``httpx``.

Use this policy to retry operations that issue HTTP requests with
``httpx`` and call ``response.raise_for_status()``. Timeouts and
transport errors are retried, as are error responses whose status code
indicates a temporary condition on the server side.

Example:
    ```pycon
    >>> import httpx
    >>> from aretriable import retry
    >>> from aretriable.policies import TransientHttpErrorPolicy
    >>> from aretriable.strategies import Backoff
    >>> def fetch() -> httpx.Response:
    ...     response = httpx.get("https://api.example.com/data")
    ...     return response.raise_for_status()
    ...
    >>> retry(fetch, strategy=Backoff(), policy=TransientHttpErrorPolicy())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = ["RETRY_STATUS_CODES", "TransientHttpErrorPolicy"]

import httpx

from aretriable.policies.base import RetryPolicy
from aretriable.utils.validation import check_not_none

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


class TransientHttpErrorPolicy(RetryPolicy):
    """Retry policy for transient ``httpx`` failures.

    The following exceptions are retriable:

    - ``httpx.TimeoutException`` (connect, read, write and pool timeouts)
    - ``httpx.TransportError`` (connection and network errors)
    - ``httpx.HTTPStatusError`` whose status code is in
      ``status_forcelist``

    Any other exception is not retried.

    Args:
        status_forcelist: HTTP status codes that trigger a retry.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretriable.policies import TransientHttpErrorPolicy
        >>> policy = TransientHttpErrorPolicy()
        >>> policy.can_retry(httpx.ConnectTimeout("timed out"))
        True
        >>> request = httpx.Request("GET", "https://example.com")
        >>> response = httpx.Response(404, request=request)
        >>> policy.can_retry(httpx.HTTPStatusError("not found", request=request, response=response))
        False

        ```
    """

    def __init__(self, status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES) -> None:
        self.status_forcelist = tuple(status_forcelist)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(status_forcelist={self.status_forcelist})"

    def can_retry(self, exception: Exception) -> bool:
        check_not_none(exception, "exception")
        if isinstance(exception, httpx.HTTPStatusError):
            return exception.response.status_code in self.status_forcelist
        # TimeoutException is a subclass of TransportError
        return isinstance(exception, httpx.TransportError)
