"""
Tests for the Streamlit pages, rendered with Streamlit's AppTest harness.
"""
import pytest
from streamlit.testing.v1 import AppTest

from blogfusion_app.ui import dashboard, editor, feed
from blogfusion_app.ui.navigation import resolve_page, sidebar_entries


STORED_POST = {
    "id": "p1",
    "author_id": "u1",
    "title": "Old title",
    "content": "<b>Old body</b>",
    "excerpt": None,
    "cover_image": None,
    "category": None,
    "tags": ["a"],
    "created_at": "2025-01-01T00:00:00Z",
    "updated_at": "2025-01-01T00:00:00Z",
    "author": {"id": "u1", "username": "alice", "name": "Alice", "bio": None, "avatar": None},
}


def render_editor():
    from blogfusion_app.ui.editor import editor_page
    editor_page()


def render_post():
    from blogfusion_app.ui.feed import post_page
    post_page()


@pytest.fixture
def stored_post(monkeypatch):
    monkeypatch.setattr(editor, "get_post", lambda post_id: dict(STORED_POST))
    monkeypatch.setattr(feed, "get_post", lambda post_id: dict(STORED_POST))
    return STORED_POST


def signed_in(at, user_id="u1"):
    at.session_state["access_token"] = "tok"
    at.session_state["user"] = {"id": user_id, "name": "Alice"}
    return at


class TestEditorPage:
    """Tests for the post editor's draft handling."""

    def test_edit_loads_stored_post(self, stored_post):
        """Test editing fills the form from the stored post."""
        at = signed_in(AppTest.from_function(render_editor))
        at.session_state["edit_post_id"] = "p1"
        at.run()

        assert at.text_input("draft_title").value == "Old title"
        assert at.text_input("draft_tags").value == "a"

    def test_new_post_after_editing_starts_blank(self, stored_post):
        """Test New Post after an edit shows an empty form and no old suggestion."""
        at = signed_in(AppTest.from_function(render_editor))
        at.session_state["edit_post_id"] = "p1"
        at.run()
        assert at.text_input("draft_title").value == "Old title"

        # what the New Post buttons do
        del at.session_state["edit_post_id"]
        del at.session_state["draft_for"]
        at.session_state["ai_suggestion"] = "stale"
        at.run()

        assert at.title[0].value == "✏️ New Post"
        assert at.text_input("draft_title").value == ""
        assert at.text_area("draft_content").value == ""
        assert "ai_suggestion" not in at.session_state

    def test_new_draft_survives_reruns(self, stored_post):
        """Test typing into a new post is not wiped on the next rerun."""
        at = signed_in(AppTest.from_function(render_editor))
        at.run()
        at.text_input("draft_title").input("Fresh").run()

        assert at.text_input("draft_title").value == "Fresh"


class TestPostPage:
    """Tests for the single-post page."""

    def test_body_is_not_rendered_as_raw_html(self, stored_post):
        """Test the post body never reaches the page as raw HTML."""
        at = AppTest.from_function(render_post)
        at.session_state["post_id"] = "p1"
        at.run()

        body = [m for m in at.markdown if m.value == STORED_POST["content"]]
        assert body
        assert not any(m.proto.allow_html for m in body)

    def test_readers_get_no_author_controls(self, stored_post):
        """Test anonymous and other users see no edit or delete buttons."""
        for user_id in (None, "u2"):
            at = AppTest.from_function(render_post)
            if user_id:
                signed_in(at, user_id)
            at.session_state["post_id"] = "p1"
            at.run()

            keys = {b.key for b in at.button}
            assert "edit_post" not in keys
            assert "delete_post" not in keys

    def test_author_can_open_editor(self, stored_post):
        """Test the author's Edit button opens this post in the editor."""
        at = signed_in(AppTest.from_function(render_post))
        at.session_state["post_id"] = "p1"
        at.run()

        at.button("edit_post").click().run()
        assert at.session_state["page"] == "editor"
        assert at.session_state["edit_post_id"] == "p1"

    def test_author_deletes_after_confirming(self, stored_post, monkeypatch):
        """Test Delete asks first, then removes the post and returns to the dashboard."""
        deleted = []

        def fake_delete(token, post_id):
            deleted.append((token, post_id))
            return {"message": "Post deleted successfully"}

        monkeypatch.setattr(dashboard, "delete_post", fake_delete)
        at = signed_in(AppTest.from_function(render_post))
        at.session_state["post_id"] = "p1"
        at.run()

        at.button("delete_post").click().run()
        assert deleted == []
        assert at.warning

        at.button("confirm_del_p1").click().run()
        assert deleted == [("tok", "p1")]
        assert at.session_state["page"] == "dashboard"


class TestNavigation:
    """Tests for page routing."""

    PAGES = ("explore", "post", "login", "dashboard", "editor")

    @pytest.mark.parametrize("page", ["explore", "post"])
    def test_readers_can_browse_anonymously(self, page):
        """Test the feed and post pages need no sign-in."""
        assert resolve_page(page, False, self.PAGES) == page

    @pytest.mark.parametrize("page", ["dashboard", "editor"])
    def test_author_pages_need_sign_in(self, page):
        """Test anonymous visitors are sent to sign in for author pages."""
        assert resolve_page(page, False, self.PAGES) == "login"
        assert resolve_page(page, True, self.PAGES) == page

    def test_signed_in_user_skips_login(self):
        """Test a signed-in user asking for login lands on the feed."""
        assert resolve_page("login", True, self.PAGES) == "explore"

    def test_unknown_page_falls_back_to_feed(self):
        """Test an unknown page name shows the feed."""
        assert resolve_page("nowhere", False, self.PAGES) == "explore"

    def test_sidebar_entries(self):
        """Test anonymous visitors get a Sign in entry instead of author pages."""
        assert [page for _, page in sidebar_entries(False)] == ["explore", "login"]
        assert [page for _, page in sidebar_entries(True)] == ["explore", "dashboard", "editor"]
