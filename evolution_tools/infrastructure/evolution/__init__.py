"""Evolution API request client."""

from .errors import RequestError, RequestErrorKind, RequestOutcome, classify_failure
from .http_client import EvolutionClientConfig, EvolutionHttpClient
from .retry import RetryPolicy

__all__ = [
    "EvolutionClientConfig",
    "EvolutionHttpClient",
    "RequestError",
    "RequestErrorKind",
    "RequestOutcome",
    "RetryPolicy",
    "classify_failure",
]
