"""
HTTP content fetching for pkgscout strategies.

Strategies hand a URL and an ``Options`` object to ``page_content()`` and get
back a plain dict of response metadata. Ordinary failures (404s, timeouts,
DNS errors, empty bodies) never raise here; they are reported in the
``messages`` list so the strategy can return an empty result and the
caller can decide how loud to be about it.

Returned keys:

- **content** (str): Response body. Only present on a non-empty 2xx response.
- **final_url** (str): URL after redirects.
- **status_code** (int): HTTP status of the final response.
- **messages** (list[str]): Human-readable failure descriptions.

Example:
    >>> from pkgscout.io import Options, page_content
    >>> data = page_content(
    ...     "https://crates.io/api/v1/crates/serde/versions",
    ...     options=Options(timeout=10),
    ... )
    >>> if "content" not in data:
    ...     print(data["messages"])

Notes:
- Each call uses its own requests.Session, closed on return
- No retries are performed; a failed request is reported once
- POST is used when ``post_form`` or ``post_json`` is set
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any

import requests

from pkgscout.exceptions import ConfigError

DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "pkgscout/0.1"


@dataclass(frozen=True)
class Options:
    """Request settings forwarded to the fetch layer.

    Attributes:
        timeout: Per-request timeout in seconds.
        headers: Extra request headers.
        cookies: Cookies to send.
        referer: Value for the Referer header.
        user_agent: User-Agent override.
        post_form: Form fields; switches the request to POST.
        post_json: JSON body; switches the request to POST.
    """

    timeout: float = DEFAULT_TIMEOUT
    headers: dict[str, str] = field(default_factory=dict)
    cookies: dict[str, str] = field(default_factory=dict)
    referer: str | None = None
    user_agent: str | None = None
    post_form: dict[str, Any] | None = None
    post_json: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.post_form is not None and self.post_json is not None:
            raise ConfigError("Options cannot use both post_form and post_json")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"Options timeout must be positive, got {self.timeout}")

    @property
    def method(self) -> str:
        if self.post_form is not None or self.post_json is not None:
            return "POST"
        return "GET"

    def merge(self, other: Options) -> Options:
        """Return new Options where values set on ``other`` win.

        Headers and cookies are merged key by key; other fields are taken
        from ``other`` when they differ from the defaults.
        """
        default = Options()
        changes: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(other, f.name)
            if f.name in ("headers", "cookies"):
                changes[f.name] = {**getattr(self, f.name), **value}
            elif value != getattr(default, f.name):
                changes[f.name] = value
        return replace(self, **changes)


def make_session(options: Options) -> requests.Session:
    """Create a requests.Session carrying the headers and cookies in ``options``."""
    s = requests.Session()
    s.headers.update({"User-Agent": options.user_agent or DEFAULT_USER_AGENT})
    if options.referer:
        s.headers["Referer"] = options.referer
    s.headers.update(options.headers)
    s.cookies.update(options.cookies)
    return s


def page_content(url: str, options: Options | None = None) -> dict[str, Any]:
    """Fetch the text at ``url`` and describe what happened.

    Args:
        url: URL to fetch.
        options: Request settings. Defaults to ``Options()``.

    Returns:
        Dict with ``content`` on success; ``messages`` (and usually
            ``status_code``) on failure. See module docstring.
    """
    from pkgscout.logging import get_global_logger

    logger = get_global_logger()
    options = options or Options()

    logger.verbose("HTTP", f"{options.method} {url}")
    try:
        with make_session(options) as session:
            if options.method == "POST":
                resp = session.post(
                    url,
                    data=options.post_form,
                    json=options.post_json,
                    timeout=options.timeout,
                    allow_redirects=True,
                )
            else:
                resp = session.get(url, timeout=options.timeout, allow_redirects=True)
    except requests.exceptions.RequestException as err:
        logger.verbose("HTTP", f"Request failed: {err}")
        return {"messages": [f"Failed to fetch {url}: {err}"]}

    for hist in resp.history:
        logger.debug(
            "HTTP",
            f"Redirect {hist.status_code} -> {hist.headers.get('Location', 'unknown')}",
        )
    logger.verbose("HTTP", f"Response: {resp.status_code} {resp.reason}")

    data: dict[str, Any] = {"final_url": resp.url, "status_code": resp.status_code}
    if not resp.ok:
        data["messages"] = [f"HTTP {resp.status_code} {resp.reason} for {url}"]
        return data

    text = resp.text
    if not text:
        data["messages"] = [f"Empty response body from {url}"]
        return data

    logger.debug("HTTP", f"Received {len(text)} characters")
    data["content"] = text
    return data
