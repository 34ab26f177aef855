"""
Unit tests for store query builders.

Usage:
    pytest tests/unit/application/test_queries.py
"""

from mecene.application import queries


class TestQueries:
    """Unit tests for campaign page queries."""

    def test_campaign_by_id(self):
        """Test single campaign lookup by store id."""
        assert queries.campaign_by_id("c1") == {"_id": "c1"}

    def test_active_campaigns(self):
        """Test active listing filters registered active campaigns."""
        query = queries.active_campaigns(limit=20, skip=40)

        assert query == {
            "projectId": {"$gt": 0},
            "status": "Active",
            "$limit": 20,
            "$skip": 40,
            "$sort": {"createdAt": -1},
        }

    def test_active_campaigns_defaults(self):
        """Test default pagination."""
        query = queries.active_campaigns()

        assert query["$limit"] == 100
        assert query["$skip"] == 0

    def test_visible_milestones_excludes_hidden(self):
        """Test milestone listing excludes hidden statuses."""
        query = queries.visible_milestones("c1", limit=5, skip=0)

        assert query["campaignId"] == "c1"
        assert sorted(query["status"]["$nin"]) == [
            "Canceled",
            "Pending",
            "Proposed",
            "Rejected",
        ]
        assert query["$sort"] == {"createdAt": -1}
        assert query["$limit"] == 5

    def test_campaign_donations_excludes_returns(self):
        """Test donation listing excludes returned donations."""
        assert queries.campaign_donations("c1") == {
            "campaignId": "c1",
            "isReturn": False,
            "$sort": {"createdAt": -1},
        }

    def test_user_campaigns_skips_whole_pages(self):
        """Test user listing matches owner or reviewer and skips pages."""
        query = queries.user_campaigns("0xA", skip_pages=2, items_per_page=10)

        assert query["$or"] == [
            {"ownerAddress": "0xA"},
            {"reviewerAddress": "0xA"},
        ]
        assert query["$limit"] == 10
        assert query["$skip"] == 20

    def test_sort_not_shared_between_queries(self):
        """Test each query gets its own sort dictionary."""
        first = queries.campaign_donations("c1")
        first["$sort"]["createdAt"] = 1

        assert queries.campaign_donations("c1")["$sort"] == {"createdAt": -1}
