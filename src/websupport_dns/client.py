"""Websupport DNS client — sign requests and manage zone records via the REST API."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from typing import Self

import httpx

from websupport_dns.auth import format_date, sign_request
from websupport_dns.errors import NotFoundError, ProviderError, TransportError
from websupport_dns.models import TXT, Credentials, DnsRecord
from websupport_dns.util import split_domain

logger = logging.getLogger(__name__)

API_BASE = "https://rest.websupport.sk/v1/user/self/zone/"
REQUEST_TIMEOUT = 10
CHALLENGE_TTL = 600


@dataclass(frozen=True)
class Found:
    record: DnsRecord


@dataclass(frozen=True)
class NotFound:
    pattern: DnsRecord


@dataclass(frozen=True)
class ProviderRejected:
    error: ProviderError


LookupResult = Found | NotFound | ProviderRejected


class WebsupportClient:
    """Client for the Websupport zone/record API.

    Holds one set of credentials and one ``httpx.Client`` for its lifetime.
    Safe to share between threads; it keeps no other state between calls.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = API_BASE,
        timeout: float = REQUEST_TIMEOUT,
        challenge_ttl: int = CHALLENGE_TTL,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._credentials = credentials
        self._base_url = base_url
        self._challenge_ttl = challenge_ttl
        self._client = _http_client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _record_url(self, zone: str, record_id: int | None = None) -> str:
        url = f"{self._base_url}{zone}/record"
        if record_id is not None:
            url = f"{url}/{record_id}"
        return url

    def request(self, method: str, url: str, record: DnsRecord | None = None) -> httpx.Response:
        """Send a signed request and return the response if its status is below 400.

        Raises:
            ConfigError: ``url`` cannot be signed.
            TransportError: No response was received.
            ProviderError: The API answered with status >= 400.
        """
        timestamp = int(time.time())
        signature = sign_request(method, url, self._credentials.api_secret, timestamp)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Date": format_date(timestamp),
        }
        content = json.dumps(record.to_dict()) if record is not None else None

        logger.debug("%s %s", method, url)
        try:
            resp = self._client.request(
                method,
                url,
                content=content,
                headers=headers,
                auth=(self._credentials.api_key, signature),
            )
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise ProviderError.from_response(resp)
        return resp

    def get_dns_records(self, zone: str) -> list[DnsRecord]:
        """List every record in ``zone`` in provider order."""
        resp = self.request("GET", self._record_url(zone))
        try:
            # A null listing is an empty zone.
            items = resp.json()["items"] or []
            return [DnsRecord.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            status = f"{resp.status_code} {resp.reason_phrase}"
            raise ProviderError(
                status=status, messages=[f"Malformed record listing for zone '{zone}': {exc}"]
            ) from exc

    def lookup_record(self, zone: str, pattern: DnsRecord) -> LookupResult:
        """Find the first record in ``zone`` matching ``pattern``."""
        try:
            records = self.get_dns_records(zone)
        except ProviderError as exc:
            return ProviderRejected(exc)
        for record in records:
            if pattern.matches(record):
                return Found(record)
        return NotFound(pattern)

    def find_dns_record(self, zone: str, pattern: DnsRecord) -> DnsRecord:
        """Like :meth:`lookup_record`, but raise instead of returning a miss."""
        result = self.lookup_record(zone, pattern)
        if isinstance(result, Found):
            return result.record
        if isinstance(result, ProviderRejected):
            raise result.error
        raise NotFoundError(
            record=pattern,
            messages=[f"no such domain '{pattern.name}' with key '{pattern.content}' found"],
        )

    def create_record(self, zone: str, record: DnsRecord) -> None:
        self.request("POST", self._record_url(zone), record)
        logger.info("Created %s record %s in zone %s", record.type, record.name, zone)

    def update_record(self, zone: str, old_pattern: DnsRecord, new_record: DnsRecord) -> None:
        found = self.find_dns_record(zone, old_pattern)
        self.request("PUT", self._record_url(zone, found.id), new_record)
        logger.info("Updated %s record %s (id %d) in zone %s", found.type, found.name, found.id, zone)

    def delete_record(self, zone: str, pattern: DnsRecord) -> None:
        found = self.find_dns_record(zone, pattern)
        self.request("DELETE", self._record_url(zone, found.id))
        logger.info("Deleted %s record %s (id %d) from zone %s", found.type, found.name, found.id, zone)

    def present(self, fqdn: str, token: str) -> None:
        """Publish the challenge TXT record. Tolerates being called repeatedly.

        The API does not tell a duplicate apart from other validation
        failures, so any provider rejection of the create counts as present.
        """
        zone, name = split_domain(fqdn)
        record = DnsRecord(type=TXT, name=name, content=token, ttl=self._challenge_ttl)
        try:
            self.create_record(zone, record)
        except ProviderError as exc:
            logger.warning(
                "Create of TXT record %s in zone %s rejected (%s): %s; assuming it already exists",
                name,
                zone,
                exc.status,
                "; ".join(exc.messages) or exc.message,
            )

    def clean_up(self, fqdn: str, token: str) -> None:
        """Delete only the challenge TXT record whose content is ``token``."""
        zone, name = split_domain(fqdn)
        self.delete_record(zone, DnsRecord(type=TXT, name=name, content=token))
