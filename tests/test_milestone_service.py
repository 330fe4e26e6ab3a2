# =============================================================================
# tests/test_milestone_service.py - Milestone Service Tests
# =============================================================================

from datetime import date

import pytest

from app.exceptions import MilestoneNotFoundError, NotProjectOwnerError
from core.models.milestone import MilestoneCreate, MilestoneUpdate
from core.services.milestone_service import MilestoneService
from tests.conftest import make_builder


# =============================================================================
# MilestoneService Tests
# =============================================================================

class TestMilestones:
    """Tests for project roadmaps."""

    def _create(self, creator, project, title, target=None):
        return MilestoneService.create_milestone(
            project["id"],
            creator["user_id"],
            MilestoneCreate(title=title, target_date=target),
        )

    def test_create(self, fake_db, creator, project):
        milestone = self._create(creator, project, "Prototype", date(2025, 6, 1))

        assert milestone["is_completed"] is False
        assert milestone["target_date"] == "2025-06-01"

    def test_non_owner_cannot_create(self, fake_db, supporter, project):
        with pytest.raises(NotProjectOwnerError):
            self._create(supporter, project, "Hijack")

    def test_ordering(self, fake_db, creator, project):
        """Open milestones by date (undated last), then completed ones."""
        undated = self._create(creator, project, "Someday")
        late = self._create(creator, project, "Launch", date(2025, 9, 1))
        soon = self._create(creator, project, "Prototype", date(2025, 6, 1))
        done_first = self._create(creator, project, "Idea", date(2025, 1, 1))
        done_second = self._create(creator, project, "Sketch", date(2025, 2, 1))

        MilestoneService.complete_milestone(done_first["id"], creator["user_id"])
        MilestoneService.complete_milestone(done_second["id"], creator["user_id"])

        ordered = MilestoneService.get_project_milestones(project["id"])
        assert [m["title"] for m in ordered] == [
            soon["title"], late["title"], undated["title"], done_first["title"], done_second["title"],
        ]

    def test_complete_and_reopen(self, fake_db, creator, project):
        milestone = self._create(creator, project, "Prototype")

        done = MilestoneService.complete_milestone(milestone["id"], creator["user_id"])
        assert done["is_completed"] is True
        assert done["completed_at"]

        reopened = MilestoneService.complete_milestone(milestone["id"], creator["user_id"], is_completed=False)
        assert reopened["is_completed"] is False
        assert reopened["completed_at"] is None

    def test_complete_twice_keeps_timestamp(self, fake_db, creator, project):
        milestone = self._create(creator, project, "Prototype")

        first = MilestoneService.complete_milestone(milestone["id"], creator["user_id"])
        second = MilestoneService.complete_milestone(milestone["id"], creator["user_id"])
        assert second["completed_at"] == first["completed_at"]

    def test_update(self, fake_db, creator, project):
        milestone = self._create(creator, project, "Prototype")

        updated = MilestoneService.update_milestone(
            milestone["id"],
            creator["user_id"],
            MilestoneUpdate(description="Breadboard version", target_date=date(2025, 7, 4)),
        )
        assert updated["title"] == "Prototype"
        assert updated["description"] == "Breadboard version"
        assert updated["target_date"] == "2025-07-04"

    def test_delete(self, fake_db, creator, project):
        milestone = self._create(creator, project, "Prototype")
        stranger = make_builder(fake_db, name="Mallory")

        with pytest.raises(NotProjectOwnerError):
            MilestoneService.delete_milestone(milestone["id"], stranger["user_id"])

        assert MilestoneService.delete_milestone(milestone["id"], creator["user_id"]) is True
        with pytest.raises(MilestoneNotFoundError):
            MilestoneService.get_milestone(milestone["id"])
