"""
Pytest configuration and fixtures
"""

import base64
import json
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest

from archiver.alerts import AlertDispatcher
from archiver.base import Destination, Source
from core.exceptions import DestinationWriteError, SetConfigurationError
from models.base import LogLevel
from schemas.config import AlertConfig
from schemas.event_log import EventLogItem


# ============================================================================
# Test doubles
# ============================================================================

class RecordingAlertDispatcher(AlertDispatcher):
    """Keeps every alert instead of sending it"""

    def __init__(self):
        self.alerts: List[str] = []
        self.configs: List[AlertConfig] = []

    def send(self, config: AlertConfig, message: str) -> None:
        self.configs.append(config)
        self.alerts.append(message)


class StaticSource(Source):
    """Returns the same payload for every set, or raises ``error``"""

    def __init__(self, data: bytes = b'{"a":1}', error: Optional[Exception] = None, reject_sets=()):
        self.data = data
        self.error = error
        self.reject_sets = set(reject_sets)
        self.sets: List[str] = []
        self.reads = 0

    def for_set(self, set_name: str, set_config: Any) -> None:
        if set_name in self.reject_sets:
            raise SetConfigurationError(f"'Path' is empty in set '{set_name}'")
        self.sets.append(set_name)

    async def read(self) -> bytes:
        self.reads += 1
        if self.error:
            raise self.error
        return self.data


class RecordingDestination(Destination):
    """Records writes; sets named in ``fail_sets`` fail without emitting events"""

    def __init__(self, fail_sets=()):
        self.fail_sets = set(fail_sets)
        self.set_name = ""
        self.writes: List[tuple] = []

    def for_set(self, set_name: str, set_config: Any) -> None:
        self.set_name = set_name

    async def write(self, data: bytes, event_log) -> None:
        self.writes.append((self.set_name, data))
        if self.set_name in self.fail_sets:
            raise DestinationWriteError("simulated write failure")
        await event_log.put(EventLogItem(level=LogLevel.INFO, message=f"stored {len(data)} bytes"))


def factory_for(adapter):
    """Adapter factory that ignores its config and returns ``adapter``"""
    async def factory(_config):
        return adapter
    return factory


# ============================================================================
# Fake REST API
# ============================================================================

SALESFORCE_TOKEN = "sf-access-token"
SALESFORCE_INSTANCE = "https://instance.example.com/"

FAKE_ENDPOINTS: Dict[str, Dict[str, str]] = {
    "/workday/users": {
        "auth_type": "basic",
        "username": "workday-user",
        "password": "workday-pass",
        "method": "GET",
        "body": '{"Report_Entry":[{"Employee_ID":"12345","First_Name":"John"}]}',
    },
    "/other/users": {
        "auth_type": "bearer",
        "password": "static-token",
        "method": "GET",
        "body": '[{"id":"1","email":"one@example.com"}]',
    },
    "/salesforce/users": {
        "auth_type": "SalesforceOauth",
        "password": SALESFORCE_TOKEN,
        "method": "GET",
        "body": '{"totalSize":1,"done":true,"records":[{"Email":"sf@example.com"}]}',
    },
    "/other/create": {
        "auth_type": "bearer",
        "password": "static-token",
        "method": "POST",
        "body": '{"id":"1234"}',
    },
}

SALESFORCE_LOGIN = {
    "username": "sf-user",
    "password": "sf-pass",
    "client_id": "sf-client",
    "client_secret": "sf-secret",
}


def _expected_authorization(endpoint: Dict[str, str]) -> str:
    if endpoint["auth_type"] == "basic":
        raw = f"{endpoint['username']}:{endpoint['password']}".encode()
        return "Basic " + base64.b64encode(raw).decode()
    return "Bearer " + endpoint["password"]


class FakeRestAPI:
    """In-process REST API served through httpx.MockTransport"""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/services/oauth2/token":
            return self._token(request)

        endpoint = FAKE_ENDPOINTS.get(request.url.path)
        if endpoint is None:
            return httpx.Response(404, text="no such endpoint")
        if request.method != endpoint["method"]:
            return httpx.Response(405, text="method not allowed")
        if request.headers.get("Authorization") != _expected_authorization(endpoint):
            return httpx.Response(401, text='{"error":"unauthorized"}')
        return httpx.Response(200, content=endpoint["body"].encode())

    def _token(self, request: httpx.Request) -> httpx.Response:
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        if form.get("grant_type") != "password":
            return httpx.Response(400, json={"error": "unsupported_grant_type"})
        for key, value in SALESFORCE_LOGIN.items():
            if form.get(key) != value:
                return httpx.Response(400, json={"error": "invalid_grant"})
        return httpx.Response(200, content=json.dumps({
            "id": "https://login.example.com/id/00D/005",
            "issued_at": "1600000000000",
            "instance_url": SALESFORCE_INSTANCE,
            "signature": "sig",
            "access_token": SALESFORCE_TOKEN,
            "token_type": "Bearer",
        }).encode())


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def fake_api():
    return FakeRestAPI()


@pytest.fixture
def alert_dispatcher():
    return RecordingAlertDispatcher()


@pytest.fixture
def write_config(tmp_path):
    """Write a configuration document and return its path"""

    def _write(document: Any, name: str = "config.json") -> str:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document)
        else:
            path.write_text(json.dumps(document))
        return str(path)

    return _write


@pytest.fixture
def base_config() -> Dict[str, Any]:
    """Configuration with one set; adapters are injected by the tests"""
    return {
        "Runtime": {"DryRunMode": False},
        "Source": {"Type": "RestAPI", "AdapterConfig": {"BaseURL": "https://api.example.com"}},
        "Destination": {"Type": "S3", "AdapterConfig": {"BucketName": "archive"}},
        "Alert": {"RecipientEmails": ["ops@example.com"]},
        "Sets": [
            {"Name": "users", "Source": {"Path": "/users"}, "Destination": {}},
        ],
    }
