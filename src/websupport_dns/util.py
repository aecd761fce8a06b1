"""DNS utility functions."""

from __future__ import annotations

from websupport_dns.errors import ConfigError


def split_domain(fqdn: str) -> tuple[str, str]:
    """Split a challenge FQDN into (zone_root, record_name).

    The zone root is the last two labels and the record name is whatever
    precedes them (empty for the zone apex).

    Note: This assumes every zone is a two-label domain. It is wrong for
    multi-label public suffixes (``example.co.uk``) and for delegated
    sub-zones, where the record would be created in the wrong zone.

    Args:
        fqdn: Fully qualified record name, optionally with a trailing dot
            (e.g. "_acme-challenge.example.com.").

    Returns:
        Tuple of (zone_root, record_name).
    """
    labels = fqdn.removesuffix(".").split(".")
    if len(labels) < 2 or not all(labels):
        raise ConfigError(f"Cannot derive a zone from domain '{fqdn}'")
    return ".".join(labels[-2:]), ".".join(labels[:-2])
