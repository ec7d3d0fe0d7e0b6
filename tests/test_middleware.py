"""
Tests for the access log written once per request.
"""

import logging
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError


def _access_records(caplog):
    return [r for r in caplog.records if r.name == "api.middleware"]


class TestAccessLog:
    @pytest.mark.asyncio
    async def test_authenticated_request_logs_caller(self, client, login_as, caplog):
        creds = await login_as("log@example.com")
        caplog.clear()
        caplog.set_level(logging.INFO, logger="api.middleware")

        await client.get("/api/todos", headers={"Authorization": creds["token"]})

        records = _access_records(caplog)
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        message = records[0].getMessage()
        assert f"user={creds['user_id']}" in message
        assert "GET /api/todos" in message
        assert "status=200" in message

    @pytest.mark.asyncio
    async def test_rejected_request_is_anonymous_warning(self, client, caplog):
        caplog.set_level(logging.INFO, logger="api.middleware")

        await client.get("/api/todos")

        records = _access_records(caplog)
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert "user=anonymous" in records[0].getMessage()
        assert "status=403" in records[0].getMessage()

    @pytest.mark.asyncio
    async def test_token_is_never_logged(self, client, login_as, caplog):
        creds = await login_as("log@example.com")
        caplog.set_level(logging.DEBUG)

        await client.get("/api/todos", headers={"Authorization": creds["token"]})

        assert all(creds["token"] not in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_store_failure_logs_error(self, client, login_as, caplog):
        creds = await login_as("log@example.com")
        caplog.set_level(logging.INFO, logger="api.middleware")
        with patch("api.routes.list_todos", side_effect=OperationalError("SELECT", {}, Exception("down"))):
            await client.get("/api/todos", headers={"Authorization": creds["token"]})

        records = _access_records(caplog)
        assert records[-1].levelno == logging.ERROR
        assert "status=500" in records[-1].getMessage()
