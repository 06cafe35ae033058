import httpx


class HttpError(Exception):
    """Raised when a remote resource cannot be fetched or decoded."""


def fetch_json(url: str, timeout: float = 30.0):
    """Fetch a URL and decode its JSON body."""
    try:
        response = httpx.get(url, follow_redirects=True, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch {url}: {e}") from e
    except ValueError as e:
        raise HttpError(f"Invalid JSON from {url}: {e}") from e
