"""
Unit tests for adapter selection
"""

import asyncio

import pytest

from archiver.base import NullDestination, NullSource
from archiver.destinations.s3 import S3Destination
from archiver.factory import create_destination, create_source
from archiver.sources.rest_api import RestAPISource
from core.exceptions import ConfigurationError
from schemas.config import DestinationConfig, SourceConfig


class TestCreateSource:

    @pytest.mark.asyncio
    async def test_rest_api(self):
        source = await create_source(SourceConfig(
            type="RestAPI",
            adapter_config={"BaseURL": "https://api.example.com", "AuthType": "bearer", "Password": "t"},
        ))

        assert isinstance(source, RestAPISource)
        assert source.config.base_url == "https://api.example.com"

    @pytest.mark.asyncio
    async def test_null_source_returns_configured_data(self):
        source = await create_source(SourceConfig(type="Null", adapter_config={"Data": '{"a":1}'}))

        assert isinstance(source, NullSource)
        source.for_set("users", None)
        assert await source.read() == b'{"a":1}'

    @pytest.mark.asyncio
    async def test_null_source_without_config(self):
        source = await create_source(SourceConfig(type="Null"))
        assert await source.read() == b""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source_type", ["Workday", "restapi", "S3"])
    async def test_unrecognized_type(self, source_type):
        with pytest.raises(ConfigurationError) as exc_info:
            await create_source(SourceConfig(type=source_type))

        assert "unrecognized source type" in str(exc_info.value)
        assert exc_info.value.context["type"] == source_type

    @pytest.mark.asyncio
    async def test_invalid_rest_api_config(self):
        with pytest.raises(ConfigurationError):
            await create_source(SourceConfig(type="RestAPI", adapter_config={"AuthType": "digest"}))


class TestCreateDestination:

    @pytest.mark.asyncio
    async def test_null_destination_emits_info(self):
        destination = await create_destination(DestinationConfig(type="Null"))
        assert isinstance(destination, NullDestination)

        destination.for_set("users", None)
        event_log = asyncio.Queue()
        await destination.write(b"12345", event_log)

        item = event_log.get_nowait()
        assert item.message == "discarded 5 bytes for set users"
        assert event_log.empty()

    @pytest.mark.asyncio
    async def test_s3(self, monkeypatch):
        created = {}

        def fake_client(**kwargs):
            created.update(kwargs)
            return object()

        monkeypatch.setattr("archiver.destinations.s3.boto3.client", fake_client)

        destination = await create_destination(DestinationConfig(
            type="S3",
            adapter_config={
                "BucketName": "archive",
                "AwsConfig": {"Region": "eu-west-1", "AccessKeyId": "a", "SecretAccessKey": "s"},
            },
        ))

        assert isinstance(destination, S3Destination)
        assert created["service_name"] == "s3"
        assert created["region_name"] == "eu-west-1"
        assert created["config"].signature_version == "s3v4"

    @pytest.mark.asyncio
    async def test_s3_incomplete_config(self):
        with pytest.raises(ConfigurationError) as exc_info:
            await create_destination(DestinationConfig(type="S3", adapter_config={"BucketName": "archive"}))

        assert "missing an AWS region" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_unrecognized_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            await create_destination(DestinationConfig(type="GCS"))

        assert "unrecognized destination type" in str(exc_info.value)
