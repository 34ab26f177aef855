"""
Unit tests for store query string encoding.

Usage:
    pytest tests/unit/infrastructure/test_query_encoding.py
"""

from mecene.application import queries
from mecene.domain.entities.campaign import CampaignStatus
from mecene.infrastructure.store.query_encoding import build_query, encode_query


class TestQueryEncoding:
    """Unit tests for bracket-notation encoding."""

    def test_operators_and_sort(self):
        """Test operator and sort keys are bracketed."""
        pairs = encode_query(queries.active_campaigns(limit=10, skip=0))

        assert pairs == [
            ("projectId[$gt]", "0"),
            ("status", "Active"),
            ("$limit", "10"),
            ("$skip", "0"),
            ("$sort[createdAt]", "-1"),
        ]

    def test_lists_are_indexed(self):
        """Test $nin and $or lists carry their index."""
        pairs = dict(encode_query(queries.visible_milestones("c1")))

        assert pairs["status[$nin][0]"] == "Canceled"
        assert len([k for k in pairs if k.startswith("status[$nin]")]) == 4

        user_pairs = encode_query(queries.user_campaigns("0xA", 0, 5))
        assert ("$or[0][ownerAddress]", "0xA") in user_pairs
        assert ("$or[1][reviewerAddress]", "0xA") in user_pairs

    def test_scalars(self):
        """Test booleans, enums and None are encoded as text."""
        pairs = encode_query(
            {"isReturn": False, "mined": True, "status": CampaignStatus.CANCELED, "x": None}
        )

        assert pairs == [
            ("isReturn", "false"),
            ("mined", "true"),
            ("status", "Canceled"),
            ("x", "null"),
        ]

    def test_build_query_adds_server_params(self):
        """Test server params travel under $client."""
        query = {"campaignId": "c1"}

        merged = build_query(query, {"schema": "includeTypeAndGiverDetails"})

        assert merged == {
            "campaignId": "c1",
            "$client": {"schema": "includeTypeAndGiverDetails"},
        }
        assert query == {"campaignId": "c1"}
        assert ("$client[schema]", "includeTypeAndGiverDetails") in encode_query(merged)

    def test_build_query_without_params(self):
        """Test query is copied unchanged without params."""
        assert build_query({"a": 1}) == {"a": 1}
