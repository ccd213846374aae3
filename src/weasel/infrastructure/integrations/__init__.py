"""External integrations (HTTP transport)."""

from weasel.infrastructure.integrations.http_pool import HttpClientPool

__all__ = ["HttpClientPool"]
