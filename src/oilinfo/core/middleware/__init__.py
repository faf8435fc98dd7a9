"""HTTP middleware components."""

from oilinfo.core.middleware.logging import LoggingMiddleware
from oilinfo.core.middleware.request_id import RequestIDMiddleware
from oilinfo.core.middleware.timing import TimingMiddleware

__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
