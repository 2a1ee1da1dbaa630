"""Input/Output operations for pkgscout.

Modules:

fetch : module
    Single-shot HTTP(S) text fetching that reports failures instead of
    raising them.

Public API:

page_content : function
    Fetch a URL and return a dict of content and response metadata.
Options : dataclass
    Timeout, headers, cookies and POST body settings for a fetch.
make_session : function
    Build a requests.Session from Options.

Example:
    from pkgscout.io import page_content

    data = page_content("https://crates.io/api/v1/crates/serde/versions")
    print(data.get("content", data.get("messages")))

"""

from .fetch import Options, make_session, page_content

__all__ = ["Options", "make_session", "page_content"]
