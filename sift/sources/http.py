from datetime import UTC, datetime

import httpx

from sift.errors import AuthError, RateLimitError, SearchError, ValidationError


def _int_header(headers: httpx.Headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


def rate_limit_info(headers: httpx.Headers) -> tuple[datetime | None, int | None]:
    reset = _int_header(headers, "x-ratelimit-reset")
    reset_at = None
    if reset is not None:
        try:
            reset_at = datetime.fromtimestamp(reset, UTC)
        except (ValueError, OverflowError, OSError):
            reset_at = None
    return reset_at, _int_header(headers, "x-ratelimit-remaining")


def check_response(resp: httpx.Response, service: str) -> None:
    """Translate an error response into the SearchError hierarchy."""
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = resp.status_code
        reset_at, remaining = rate_limit_info(resp.headers)

        if status == 429 or (status == 403 and remaining == 0):
            raise RateLimitError(
                f"{service} rate limit exceeded. Please wait before making more requests.",
                reset_at=reset_at,
                remaining=remaining,
                cause=e,
            ) from e
        if status in (401, 403):
            raise AuthError(f"{service} rejected the credentials ({status}). Check your API key or token.", e) from e
        if status == 422:
            raise ValidationError(f"{service} rejected the request: {_error_detail(resp)}", e) from e
        raise SearchError(f"{service} request failed ({status}): {_error_detail(resp)}", e) from e


def _error_detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data)
    return str(data)
