# =============================================================================
# tests/test_post_service.py - Post Service Tests
# =============================================================================

import pytest

from app.exceptions import NotProjectOwnerError, PostNotFoundError
from core.models.post import PostCreate
from core.services.post_service import PostService
from tests.conftest import make_project


# =============================================================================
# PostService Tests
# =============================================================================

class TestCreatePost:
    """Tests for posting updates."""

    def test_owner_posts(self, fake_db, creator, project):
        post = PostService.create_post(
            creator["user_id"],
            PostCreate(project_id=project["id"], content="First light!", images="https://img.example/1.jpg"),
        )

        assert post["like_count"] == 0
        assert post["images"] == ["https://img.example/1.jpg"]
        assert post["project"]["public_slug"] == "tiny-synth"
        assert len(fake_db.rows("posts")) == 1

    def test_non_owner_rejected(self, fake_db, supporter, project):
        with pytest.raises(NotProjectOwnerError):
            PostService.create_post(
                supporter["user_id"],
                PostCreate(project_id=project["id"], content="Not my project"),
            )
        assert fake_db.rows("posts") == []


class TestReadPosts:
    """Tests for project pages and the feed."""

    def test_project_posts_newest_first(self, fake_db, project):
        older = fake_db.seed("posts", project_id=project["id"], content="Older", images=[], like_count=0)
        newer = fake_db.seed("posts", project_id=project["id"], content="Newer", images=[], like_count=0)

        posts = PostService.get_project_posts(project["id"])
        assert [p["id"] for p in posts] == [newer["id"], older["id"]]

    def test_empty_feed_without_follows(self, fake_db, supporter, post):
        assert PostService.get_feed_posts(supporter["user_id"]) == []

    def test_feed_only_followed_projects(self, fake_db, creator, supporter, project, post):
        other = make_project(fake_db, creator, title="Garden Bot")
        fake_db.seed("posts", project_id=other["id"], content="Unfollowed", images=[], like_count=0)
        fake_db.seed("follows", user_id=supporter["user_id"], project_id=project["id"])

        feed = PostService.get_feed_posts(supporter["user_id"])

        assert [p["id"] for p in feed] == [post["id"]]
        assert feed[0]["project"]["title"] == "Tiny Synth"
        assert feed[0]["project"]["builder"]["name"] == creator["name"]

    def test_feed_pagination(self, fake_db, supporter, project):
        fake_db.seed("follows", user_id=supporter["user_id"], project_id=project["id"])
        seeded = [
            fake_db.seed("posts", project_id=project["id"], content=f"Update {i}", images=[], like_count=0)
            for i in range(5)
        ]

        page = PostService.get_feed_posts(supporter["user_id"], page=2, page_size=2)
        assert [p["content"] for p in page] == ["Update 2", "Update 1"]
        assert len(seeded) == 5

    def test_delete_post(self, fake_db, creator, supporter, post):
        with pytest.raises(NotProjectOwnerError):
            PostService.delete_post(post["id"], supporter["user_id"])

        assert PostService.delete_post(post["id"], creator["user_id"]) is True
        with pytest.raises(PostNotFoundError):
            PostService.get_post(post["id"])

