"""Tag grouping and anchor helpers shared by the Markdown and HTML exporters."""

import re

from api_doc_builder.defaults import DEFAULT_TAG
from api_doc_builder.parser.base import ApiEndpoint

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]")


def group_by_tag(
    endpoints: list[ApiEndpoint], default_tag: str = DEFAULT_TAG
) -> dict[str, list[ApiEndpoint]]:
    """Group endpoints by tag, in first-seen tag order.

    An endpoint appears under every one of its tags; untagged endpoints go
    under ``default_tag``.
    """
    groups: dict[str, list[ApiEndpoint]] = {}
    for endpoint in endpoints:
        for tag in endpoint.tags or [default_tag]:
            groups.setdefault(tag, []).append(endpoint)
    return groups


def tag_anchor(tag: str) -> str:
    return _WHITESPACE_RE.sub("-", tag.lower())


def endpoint_anchor(endpoint: ApiEndpoint) -> str:
    """Anchor for an endpoint: ``get--users--id-`` for ``GET /users/{id}``."""
    slug = _NON_ALNUM_RE.sub("-", endpoint.path).lower()
    return f"{endpoint.method.lower()}-{slug}"


def endpoint_anchors(endpoints: list[ApiEndpoint]) -> dict[tuple[str, str], str]:
    """Map each endpoint key to an anchor that is unique within the page.

    Stored ids are used as-is. Derived slugs that repeat get ``-2``, ``-3``, ...
    in endpoint order.
    """
    anchors: dict[tuple[str, str], str] = {}
    taken: set[str] = set()
    for endpoint in endpoints:
        if endpoint.key in anchors:
            continue
        anchor = endpoint.id or endpoint_anchor(endpoint)
        base, n = anchor, 1
        while anchor in taken:
            n += 1
            anchor = f"{base}-{n}"
        anchors[endpoint.key] = anchor
        taken.add(anchor)
    return anchors
