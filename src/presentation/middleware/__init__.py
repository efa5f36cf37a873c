"""
Middleware layer for the Event Catalog application.

This package contains middleware components for request processing:
correlation IDs and request timeouts.
"""

from src.presentation.middleware.correlation import CorrelationIDMiddleware
from src.presentation.middleware.timeout import TimeoutMiddleware

__all__ = ["CorrelationIDMiddleware", "TimeoutMiddleware"]
