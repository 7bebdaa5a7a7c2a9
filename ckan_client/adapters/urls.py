"""URL parsing and query merging for action paths."""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import SplitResult, parse_qs, urlencode, urlsplit, urlunsplit

from ckan_client.adapters.api_errors import InvalidAddressError
from ckan_client.domain.models import ListOptions


def parse_url(raw: str) -> SplitResult:
    """Split ``raw`` into URL parts or raise ``InvalidAddressError``."""
    text = str(raw)
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
        raise InvalidAddressError("invalid control character in URL", url=text)
    try:
        parts = urlsplit(text)
        parts.port  # validates the port component
    except ValueError as exc:
        raise InvalidAddressError(str(exc), url=text) from exc
    # "host:8080/x" or ":" parse as a scheme-less path whose first segment
    # holds a colon, which is not a usable relative reference.
    if not parts.scheme and ":" in parts.path.split("/", 1)[0]:
        raise InvalidAddressError(
            "first path segment in URL cannot contain colon", url=text
        )
    return parts


def add_options(path: str, options: Optional[ListOptions]) -> str:
    """Merge pagination options into the query of ``path``.

    Options override query parameters already present in ``path``. ``None``
    or empty options return ``path`` untouched.

    Raises:
        InvalidAddressError: If ``path`` cannot be parsed.
    """
    if options is None or options.is_empty:
        return path
    parts = parse_url(path)
    values: Dict[str, List[str]] = parse_qs(parts.query, keep_blank_values=True)
    for key, value in options.to_query().items():
        values[key] = [value]
    query = urlencode(sorted(values.items()), doseq=True)
    return urlunsplit(parts._replace(query=query))


__all__ = ["add_options", "parse_url"]
