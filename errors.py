class StatusProxyError(Exception):
    status_code = 500
    message = "Internal error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(StatusProxyError):
    status_code = 400


class ConfigError(StatusProxyError):
    status_code = 500


class UpstreamError(StatusProxyError):
    """Non-2xx answer from the monitoring API. 5xx becomes 502, the rest pass through."""

    def __init__(self, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(
            f"Monitoring API error: {upstream_status}",
            502 if upstream_status >= 500 else upstream_status,
        )


class NotFoundError(StatusProxyError):
    status_code = 404
    message = "Monitor or location data not found."


class UnexpectedError(StatusProxyError):
    status_code = 500
    message = "Failed to fetch data from the monitoring API"
