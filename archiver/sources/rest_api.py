"""
REST API data source with pluggable authentication.

This module provides the RestAPI source adapter:
- Basic and static bearer-token authentication applied per request
- Salesforce OAuth password-grant token exchange performed once, before
  any set is processed
- Error responses surfaced with the status line verbatim and the raw body
  attached for diagnosis
"""

from typing import Any, Dict, Optional
import logging

import httpx
from pydantic import ValidationError

from archiver.base import Source
from core.config import settings
from core.exceptions import (
    AuthenticationError,
    ConfigurationError,
    SetConfigurationError,
    SourceReadError,
)
from models.base import AuthType
from schemas.base import parse_raw_json
from schemas.config import SourceConfig
from schemas.rest_api import RestAPIConfig, RestAPISetConfig, SalesforceAuthResponse

logger = logging.getLogger(__name__)

BODY_LOG_LIMIT = 500


class BearerAuth(httpx.Auth):
    """Attach a static ``Authorization: Bearer <token>`` header."""

    def __init__(self, token: str):
        self.token = token

    def auth_flow(self, request: httpx.Request):
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class RestAPISource(Source):
    """
    Read one resource per set from a REST API.

    Attributes:
        config: Adapter configuration (credentials may be replaced by a
            token exchange)
        set_config: Configuration of the currently applied set
        auth_type: Resolved authentication strategy
    """

    def __init__(
        self,
        config: RestAPIConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.config = config
        self.set_name = ""
        self.set_config = RestAPISetConfig()
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self._transport = transport

        try:
            self.auth_type = AuthType(config.auth_type)
        except ValueError:
            raise ConfigurationError(
                f"unrecognized AuthType '{config.auth_type}'",
                context={"valid_auth_types": ", ".join(t.value for t in AuthType if t.value)}
            )

    @classmethod
    def from_source_config(
        cls,
        source_config: SourceConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RestAPISource":
        """Validate the raw adapter configuration and apply defaults."""
        try:
            config = parse_raw_json(RestAPIConfig, source_config.adapter_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"invalid RestAPI adapter config: {e}",
                original_exception=e
            )
        return cls(config, transport=transport)

    async def authenticate(self) -> None:
        """
        Resolve credentials that need a round trip before the first read.

        Only SalesforceOauth needs one: the configured password is swapped
        for an access token and BaseURL for the returned instance URL.

        Raises:
            AuthenticationError: If the token exchange fails
        """
        if self.auth_type != AuthType.SALESFORCE_OAUTH:
            return

        token = await self._get_salesforce_oauth_token()
        self.config.password = token

    def _request_auth(self) -> Optional[httpx.Auth]:
        if self.auth_type == AuthType.BASIC:
            return httpx.BasicAuth(self.config.username, self.config.password)
        if self.auth_type in (AuthType.BEARER, AuthType.SALESFORCE_OAUTH):
            return BearerAuth(self.config.password)
        return None

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    def for_set(self, set_name: str, set_config: Any) -> None:
        """
        Apply the set's Path. A missing leading "/" is inserted.

        Raises:
            SetConfigurationError: If the config is malformed or Path is empty
        """
        try:
            parsed = parse_raw_json(RestAPISetConfig, set_config)
        except ValidationError as e:
            raise SetConfigurationError(
                f"bad configuration in set '{set_name}': {e}",
                context={"set_name": set_name},
                original_exception=e
            )

        if not parsed.path:
            raise SetConfigurationError(
                f"'Path' is empty in set '{set_name}'",
                context={"set_name": set_name}
            )

        self.set_name = set_name
        self.set_config = parsed

    async def read(self) -> bytes:
        """
        Request BaseURL + Path with the configured method.

        Raises:
            SourceReadError: On transport failure or a status >= 400; the
                raw body (if any) is available as ``response_body``
        """
        url = self.config.base_url + self.set_config.path
        headers = {"Content-Type": "application/json"}

        try:
            return await self.http_request(self.config.request_method, url, headers=headers)
        except SourceReadError as e:
            raise SourceReadError(
                f"restAPI read failed with http error: {e.message}",
                context={"set_name": self.set_name, "url": url},
                original_exception=e.original_exception,
                status_code=e.status_code,
                response_body=e.response_body
            )

    async def http_request(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> bytes:
        """
        Send one request with the user agent, caller headers and resolved auth.

        Returns:
            Raw response body

        Raises:
            SourceReadError: On transport failure or a status >= 400
        """
        request_headers = dict(headers or {})
        request_headers["User-Agent"] = self.config.user_agent

        try:
            async with self._client() as client:
                response = await client.request(
                    method,
                    url,
                    content=body,
                    headers=request_headers,
                    auth=self._request_auth(),
                )
        except httpx.HTTPError as e:
            raise SourceReadError(str(e) or type(e).__name__, original_exception=e)

        if response.status_code >= 400:
            raise SourceReadError(
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                response_body=response.content
            )

        logger.debug(f"{method} {url} returned {len(response.content)} bytes")
        return response.content

    async def _get_salesforce_oauth_token(self) -> str:
        """Exchange username/password/client credentials for an access token."""
        form = {
            "grant_type": "password",
            "username": self.config.username,
            "password": self.config.password,
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
        }
        headers = {
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
        }

        try:
            async with self._client() as client:
                response = await client.post(self.config.base_url, data=form, headers=headers)
        except httpx.HTTPError as e:
            raise AuthenticationError(
                "error getting Oauth token",
                context={"token_url": self.config.base_url},
                original_exception=e
            )

        if response.status_code >= 400:
            raise AuthenticationError(
                f"error getting Oauth token: {response.status_code} {response.reason_phrase}",
                context={
                    "token_url": self.config.base_url,
                    "response_body": response.text[:BODY_LOG_LIMIT]
                }
            )

        try:
            auth_response = SalesforceAuthResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                f"Unable to parse auth response, status: {response.status_code}, "
                f"body: {response.text[:BODY_LOG_LIMIT]}"
            )
            raise AuthenticationError(
                "error getting Oauth token: unable to parse auth response",
                context={"token_url": self.config.base_url},
                original_exception=e
            )

        if not auth_response.access_token or not auth_response.instance_url:
            raise AuthenticationError(
                "error getting Oauth token: response is missing access_token or instance_url",
                context={"token_url": self.config.base_url}
            )

        self.config.base_url = auth_response.instance_url.rstrip("/")
        logger.info(f"Obtained Salesforce access token for instance {self.config.base_url}")

        return auth_response.access_token


async def create_rest_api_source(
    source_config: SourceConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> RestAPISource:
    """
    Build a RestAPI source and resolve its authentication.

    Raises:
        ConfigurationError: If the adapter config is invalid
        AuthenticationError: If a required token exchange fails
    """
    source = RestAPISource.from_source_config(source_config, transport=transport)
    await source.authenticate()
    return source
