"""
Security Module - Client IP lookup and rate limiting for public forms
"""

import time
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}


def get_client_ip():
    """Get the client IP address.

    X-Forwarded-For is only honoured through ProxyFix (PROXY_FIX_X_FOR),
    which rewrites remote_addr for the configured number of proxies.
    """
    return request.remote_addr or 'unknown'


def _prune(current_time, window):
    """Drop requests outside the window and forget idle IPs"""
    for ip in list(RATE_LIMIT_REQUESTS):
        recent = [(ts, ep) for ts, ep in RATE_LIMIT_REQUESTS[ip] if current_time - ts < window]
        if recent:
            RATE_LIMIT_REQUESTS[ip] = recent
        else:
            del RATE_LIMIT_REQUESTS[ip]


def check_rate_limit(endpoint='contact'):
    """Check if IP is within rate limit"""
    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', 10)
    window = current_app.config.get('RATE_LIMIT_WINDOW', 60)
    client_ip = get_client_ip()
    current_time = time.time()

    _prune(current_time, window)

    endpoint_requests = [
        ep for ts, ep in RATE_LIMIT_REQUESTS.get(client_ip, []) if ep == endpoint
    ]
    if len(endpoint_requests) >= max_requests:
        current_app.logger.warning(f"Rate limit hit on {endpoint} from {client_ip}")
        return False

    RATE_LIMIT_REQUESTS.setdefault(client_ip, []).append((current_time, endpoint))
    return True


def reset_rate_limits():
    RATE_LIMIT_REQUESTS.clear()


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits'
]
