"""Text processing utilities."""

import re

from taskboard.core.constants import MAX_DOMAIN_LENGTH


_DOMAIN_LABEL = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?$")
_TOP_LEVEL_DOMAIN = re.compile(r"^(?:[a-z]{2,63}|xn--[a-z0-9-]{2,59})$")


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma-separated tag list.

    Entries are trimmed, blanks dropped, and order kept.

    Examples:
        >>> parse_tags("urgent, client ,, q3")
        ['urgent', 'client', 'q3']
        >>> parse_tags("")
        []
    """
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def format_tags(tags: list[str] | None) -> str:
    """Join tags back into the comma-separated form used by task forms."""
    return ", ".join(tags or [])


def is_fqdn(value: str) -> bool:
    """Check whether a host name is a fully qualified domain name.

    Requires at least two labels and an alphabetic (or punycode) top-level
    domain. No trailing dot, port, or underscore is accepted.

    Examples:
        >>> is_fqdn("tasks.example.com")
        True
        >>> is_fqdn("localhost")
        False
    """
    if not value or len(value) > MAX_DOMAIN_LENGTH:
        return False
    labels = value.lower().split(".")
    if len(labels) < 2:
        return False
    if not _TOP_LEVEL_DOMAIN.match(labels[-1]):
        return False
    return all(_DOMAIN_LABEL.match(label) for label in labels)


def strip_port(host: str) -> str:
    """Remove the port from a Host header value and lowercase it.

    Examples:
        >>> strip_port("Acme.Example.com:8000")
        'acme.example.com'
        >>> strip_port("[::1]:8000")
        '::1'
    """
    host = host.strip().lower()
    if host.startswith("["):
        return host[1:].split("]", 1)[0]
    return host.split(":", 1)[0]
