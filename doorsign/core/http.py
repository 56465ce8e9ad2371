"""HTTP client factory for external API calls.

Provides the pooled client used to talk to the e-paper status provider,
with explicit timeouts and proper resource management.
"""

import httpx

# Default timeout configuration (seconds)
DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 10.0
DEFAULT_WRITE_TIMEOUT = 10.0
DEFAULT_POOL_TIMEOUT = 5.0

# Module-level client storage for singleton pattern
_epaper_client: httpx.AsyncClient | None = None


def create_http_client(
    base_url: str = "",
    max_connections: int = 20,
    max_keepalive_connections: int = 10,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    write_timeout: float = DEFAULT_WRITE_TIMEOUT,
    pool_timeout: float = DEFAULT_POOL_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create a configured async HTTP client.

    Args:
        base_url: Base URL for all requests (empty string for none)
        max_connections: Maximum number of concurrent connections
        max_keepalive_connections: Maximum idle connections to keep alive
        connect_timeout: Timeout for establishing connection
        read_timeout: Timeout for reading response
        write_timeout: Timeout for sending request
        pool_timeout: Timeout for acquiring connection from pool
        transport: Optional transport override (e.g. httpx.MockTransport)

    Returns:
        Configured httpx.AsyncClient instance
    """
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=read_timeout,
            write=write_timeout,
            pool=pool_timeout,
        ),
        limits=httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        ),
        transport=transport,
    )


def get_epaper_http_client() -> httpx.AsyncClient:
    """Get singleton HTTP client for the e-paper provider.

    Provider URLs are configured per user, so the client carries no base URL.
    The client should be closed via close_epaper_http_client() during
    application shutdown.

    Returns:
        Configured httpx.AsyncClient instance for provider calls
    """
    global _epaper_client
    if _epaper_client is None:
        _epaper_client = create_http_client(
            max_connections=20,
            max_keepalive_connections=5,
        )
    return _epaper_client


async def close_epaper_http_client() -> None:
    """Close the e-paper HTTP client and release resources."""
    global _epaper_client
    if _epaper_client is not None:
        await _epaper_client.aclose()
        _epaper_client = None
