"""Shared test fixtures for websupport-dns."""

import json

import httpx
import pytest

from websupport_dns.client import WebsupportClient
from websupport_dns.models import Credentials

BASE = "https://rest.websupport.sk/v1/user/self/zone/"


class FakeZoneApi:
    """In-memory stand-in for the Websupport zone/record endpoints.

    Rejects creating a record whose (type, name, content) already exists,
    the way the real API answers a duplicate.
    """

    def __init__(self, records=None):
        self.records = {}
        self.requests = []
        self._next_id = 1
        for zone, item in records or []:
            self._add(zone, item)

    def _add(self, zone, item):
        item = dict(item)
        item.setdefault("id", self._next_id)
        self._next_id = max(self._next_id, item["id"]) + 1
        self.records.setdefault(zone, []).append(item)
        return item

    def items(self, zone):
        return self.records.get(zone, [])

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # /v1/user/self/zone/<zone>/record[/<id>]
        parts = request.url.path.split("/")
        zone = parts[5]
        record_id = int(parts[7]) if len(parts) > 7 else None
        items = self.records.setdefault(zone, [])

        if request.method == "GET":
            return httpx.Response(200, json={"items": items})

        if request.method == "POST":
            body = json.loads(request.content)
            for item in items:
                if (item["type"], item["name"], item["content"]) == (body["type"], body["name"], body["content"]):
                    return httpx.Response(
                        400,
                        json={"item": body, "status": "error", "errors": {"content": ["Duplicate record"]}},
                    )
            return httpx.Response(201, json={"item": self._add(zone, body), "status": "success"})

        for item in items:
            if item["id"] == record_id:
                break
        else:
            return httpx.Response(404, json={"status": "error", "errors": {"content": ["Record not found"]}})

        if request.method == "PUT":
            item.update(json.loads(request.content))
            return httpx.Response(200, json={"item": item, "status": "success"})
        if request.method == "DELETE":
            items.remove(item)
            return httpx.Response(200, json={"item": item, "status": "success"})
        return httpx.Response(405)


@pytest.fixture
def credentials():
    return Credentials(api_key="api-key", api_secret="api-secret")


@pytest.fixture
def make_client(credentials):
    """Build a WebsupportClient whose HTTP traffic goes to ``handler``."""
    clients = []

    def _make(handler):
        client = WebsupportClient(
            credentials,
            _http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        )
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.close()
