"""Data classes exchanged with the Websupport API and the challenge adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

TXT = "TXT"


@dataclass(frozen=True)
class DnsRecord:
    """A DNS record in a Websupport zone.

    ``id`` is 0 until the provider has persisted the record. When used as a
    search pattern, empty ``content`` and zero ``id``/``ttl`` match anything.
    """

    type: str
    name: str
    content: str = ""
    ttl: int = 0
    id: int = 0

    def matches(self, record: DnsRecord) -> bool:
        """Return True if ``record`` satisfies this record used as a pattern."""
        return (
            record.name == self.name
            and record.type == self.type
            and (not self.content or record.content == self.content)
            and (not self.id or record.id == self.id)
            and (not self.ttl or record.ttl == self.ttl)
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "name": self.name,
            "content": self.content,
            "ttl": self.ttl,
        }

    @classmethod
    def from_dict(cls, data: dict) -> DnsRecord:
        return cls(
            type=data.get("type") or "",
            name=data.get("name") or "",
            content=data.get("content") or "",
            ttl=int(data.get("ttl") or 0),
            id=int(data.get("id") or 0),
        )


@dataclass(frozen=True)
class Credentials:
    """Websupport API key pair. The secret never leaves the process."""

    api_key: str
    api_secret: str = field(repr=False)


@dataclass(frozen=True)
class ChallengeRequest:
    """DNS-01 challenge as handed to the solver by the issuance controller."""

    resolved_fqdn: str
    key: str
    resource_namespace: str = ""
    config: dict[str, Any] | None = None
