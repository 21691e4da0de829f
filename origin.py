from urllib.parse import urlsplit

ALLOW_METHODS = "GET, OPTIONS"
ALLOW_HEADERS = "Content-Type"
PREFLIGHT_MAX_AGE = "86400"


def resolve_origin(allowed_pattern: str | None, request_origin: str | None) -> str:
    """
    Map the configured ALLOWED_ORIGIN pattern and the request's Origin header
    to the Access-Control-Allow-Origin value to send back.

    Patterns: '*' (or empty), an exact origin, or '*.example.com' which accepts
    example.com itself and any of its subdomains. An empty return value means
    the origin is not allowed; the response is still sent and the browser
    blocks the read.
    """
    if not allowed_pattern or allowed_pattern == "*":
        return "*"
    if not request_origin:
        return allowed_pattern

    if allowed_pattern.startswith("*."):
        base_domain = allowed_pattern[2:]
        try:
            hostname = urlsplit(request_origin).hostname
        except ValueError:
            return ""
        if hostname and (hostname == base_domain or hostname.endswith("." + base_domain)):
            return request_origin
        return ""

    return allowed_pattern if request_origin == allowed_pattern else ""


def cors_headers(allowed_origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }


def preflight_headers(allowed_origin: str) -> dict[str, str]:
    h = cors_headers(allowed_origin)
    h["Access-Control-Max-Age"] = PREFLIGHT_MAX_AGE
    return h
