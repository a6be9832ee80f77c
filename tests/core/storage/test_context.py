"""
Test operation-level session context
"""
import pytest
from unittest.mock import Mock

from torsapi.core.storage.context import get_operation_session, operation_session


class TestOperationSession:

    @pytest.mark.asyncio
    async def test_session_is_published_and_closed(self):
        session = Mock()
        factory = Mock(return_value=session)

        assert get_operation_session() is None
        async with operation_session(factory) as current:
            assert current is session
            assert get_operation_session() is session

        assert get_operation_session() is None
        factory.assert_called_once()
        session.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_nested_scope_reuses_outer_session(self):
        outer_session = Mock()
        inner_factory = Mock()

        async with operation_session(Mock(return_value=outer_session)):
            async with operation_session(inner_factory) as inner:
                assert inner is outer_session
            outer_session.close.assert_not_called()

        inner_factory.assert_not_called()
        outer_session.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_session_closed_when_operation_fails(self):
        session = Mock()

        with pytest.raises(ValueError):
            async with operation_session(Mock(return_value=session)):
                raise ValueError("boom")

        session.close.assert_called_once()
        assert get_operation_session() is None
