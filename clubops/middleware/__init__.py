"""HTTP middleware: request ID and security headers.

Applied in main app; order matters (last added = outermost).
"""

from clubops.middleware.request_id import RequestIDMiddleware
from clubops.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
