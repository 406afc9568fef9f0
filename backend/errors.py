"""Gateway error taxonomy and the two response shapes it renders to.

The metadata route answers with a JSON envelope ``{"error", "details"}``;
the image route answers with short plain text. Every failure the core can
produce maps to one of these exceptions, and from there to one status code:

    ValidationError      400  bad client input, nothing sent upstream
    ConfigurationError   500  deployment is missing the credential
    UpstreamError        passthrough of the upstream status
    NetworkError         502  upstream unreachable / timed out
    StreamError          -    failure after headers were sent; logged only
"""

from typing import Optional

from fastapi.responses import JSONResponse, PlainTextResponse


class GatewayError(Exception):
    kind = "GatewayError"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    kind = "ValidationError"
    status_code = 400


class ConfigurationError(GatewayError):
    kind = "ConfigurationError"
    status_code = 500


class UpstreamError(GatewayError):
    """Upstream answered, but not with a 2xx."""
    kind = "UpstreamError"

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code


class NetworkError(GatewayError):
    kind = "NetworkError"
    status_code = 502


class StreamError(GatewayError):
    kind = "StreamError"
    status_code = 502


def json_error_response(error: str, details: Optional[str] = None, status_code: int = 500) -> JSONResponse:
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def text_error_response(exc: GatewayError) -> PlainTextResponse:
    return PlainTextResponse(exc.message, status_code=exc.status_code)
