# =============================================================================
# tests/test_supabase_client.py - Supabase Wrapper Tests
# =============================================================================

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from lib.supabase_client import SupabaseClient


@pytest.fixture
def mock_client():
    """Raw MagicMock client so the exact query arguments can be checked."""
    client = MagicMock()
    SupabaseClient._instance = client
    yield client
    SupabaseClient._instance = None


class TestQueryArguments:
    """UUID objects reach PostgREST as plain strings."""

    def test_fetch_one_normalizes_uuid(self, mock_client):
        project_id = uuid4()
        query = mock_client.table.return_value.select.return_value
        query.eq.return_value.single.return_value.execute.return_value.data = {"id": str(project_id)}

        row = SupabaseClient.fetch_one("projects", "id", project_id)

        query.eq.assert_called_once_with("id", str(project_id))
        assert row == {"id": str(project_id)}

    def test_fetch_many_dedupes_and_normalizes(self, mock_client):
        first, second = uuid4(), uuid4()
        query = mock_client.table.return_value.select.return_value
        query.in_.return_value.execute.return_value.data = []

        SupabaseClient.fetch_many("builders", "id", [first, str(first), second, None])

        query.in_.assert_called_once_with("id", [str(first), str(second)])
