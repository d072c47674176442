# _utils/_errors.py

import httpx


def describe_httpx_error(error: Exception) -> str:
    """
    Converts common httpx exceptions into concise, human-readable messages.

    Maps HTTP status errors, timeouts and transport protocol errors to short
    descriptions and falls back to the string representation for other exceptions.

    Args:
        error (Exception): The exception instance to describe. Typically an exception
            raised by httpx during HTTP requests.

    Returns:
        str: A concise, human-friendly description of the exception.
    """
    if isinstance(error, httpx.HTTPStatusError):
        code = error.response.status_code
        phrase = error.response.reason_phrase
        target = error.request.url.path
        return f"Received HTTP {code} {phrase} when requesting {target or '/'}"

    if isinstance(error, httpx.TimeoutException):
        return f"Timed out ({type(error).__name__})"

    if isinstance(error, httpx.LocalProtocolError):
        return f"Transport error: {error}"

    return str(error) or type(error).__name__
