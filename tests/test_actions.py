"""Tests for the ActionResponse boundary."""

import logging

import pytest
from sqlalchemy.exc import OperationalError

from components.core.actions import run_action
from components.core.exceptions import ConflictError, ErrorKind, NotFoundError


async def returns(value):
    return value


async def raises(exc):
    raise exc


class TestRunAction:
    """Tests for turning outcomes into responses."""

    async def test_success_carries_data(self):
        response = await run_action(returns({"id": 1}), "Failed")
        assert response.success is True
        assert response.data == {"id": 1}
        assert response.error is None
        assert response.error_kind is None

    @pytest.mark.parametrize(
        "exc,kind",
        [
            (NotFoundError("Goal not found"), ErrorKind.NOT_FOUND),
            (ConflictError("Taken"), ErrorKind.CONFLICT),
        ],
    )
    async def test_domain_errors_become_failures(self, exc, kind):
        response = await run_action(raises(exc), "Failed to do it")
        assert response.success is False
        assert response.data is None
        assert response.error == exc.detail
        assert response.error_kind == kind

    async def test_storage_errors_are_logged_and_hidden(self, caplog):
        error = OperationalError("SELECT 1", {}, Exception("database is locked"))
        with caplog.at_level(logging.ERROR):
            response = await run_action(raises(error), "Failed to get goals")

        assert response.success is False
        assert response.error == "Failed to get goals"
        assert response.error_kind == ErrorKind.INTERNAL
        assert "Failed to get goals" in caplog.text
        assert caplog.records[-1].exc_info is not None

    async def test_other_exceptions_propagate(self):
        with pytest.raises(ZeroDivisionError):
            await run_action(raises(ZeroDivisionError()), "Failed")
