"""Remote API client and its transport retry policy."""

from onchain_transfers.integrations.cdp import CDPClient
from onchain_transfers.integrations.retry import RetryConfig, is_retryable, retry_call

__all__ = [
    "CDPClient",
    "RetryConfig",
    "is_retryable",
    "retry_call",
]
