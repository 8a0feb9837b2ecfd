"""URL handling for Reddit's public JSON API."""

from collections.abc import Sequence
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from urlsum.domain.error import InvalidURLError
from urlsum.domain.value import LinkId

REDDIT_BASE_URL = "https://www.reddit.com"
MORECHILDREN_PATH = "/api/morechildren.json"


def build_listing_url(
    url: str,
    listing_limit: int = 1000,
    base_url: str = REDDIT_BASE_URL,
) -> str:
    """Turn a Reddit page URL into its JSON API URL.

    - scheme forced to https and host to www.reddit.com
    - the bare root becomes /hot
    - ``.json`` appended to the path when missing
    - ``limit=<listing_limit>`` added for comment pages

    Args:
        url: Post, subreddit or front page URL
        listing_limit: Comment page size requested for post views
        base_url: Scheme and host every request is sent to

    Returns:
        JSON API URL

    Raises:
        InvalidURLError: If the URL has no http(s) scheme or no host

    Example:
        >>> build_listing_url("https://reddit.com/")
        'https://www.reddit.com/hot.json'
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError as e:
        raise InvalidURLError(url) from e

    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise InvalidURLError(url)

    path = parts.path
    if path in ("", "/"):
        path = "/hot"
    if not path.endswith(".json"):
        path += ".json"

    query_items = parse_qsl(parts.query, keep_blank_values=True)
    if "/comments/" in path:
        query_items.append(("limit", str(listing_limit)))

    api_url = f"{base_url.rstrip('/')}{path}"
    if query_items:
        api_url += f"?{urlencode(query_items)}"
    return api_url


def is_comments_path(api_url: str) -> bool:
    """Whether a JSON API URL points at a post's comment page."""
    return "/comments/" in urlsplit(api_url).path


def build_morechildren_url(
    base_url: str,
    link_id: LinkId,
    children: Sequence[str],
    sort: str = "confidence",
    depth: int = 10,
) -> str:
    """Build a morechildren request URL.

    Parameter order and the unescaped commas between ids match what Reddit's
    own clients send.
    """
    params = [
        ("api_type", "json"),
        ("link_id", str(link_id)),
        ("children", ",".join(children)),
        ("sort", sort),
        ("limit_children", "false"),
        ("depth", str(depth)),
    ]
    query = "&".join(f"{name}={quote(value, safe=',')}" for name, value in params)
    return f"{base_url.rstrip('/')}{MORECHILDREN_PATH}?{query}"
