# blogfusion_app/ui/dashboard.py

import streamlit as st
from blogfusion_app.services.api import list_my_posts, delete_post
from blogfusion_app.ui.display import time_ago


def open_editor(post_id=None):
    st.session_state["page"] = "editor"
    st.session_state.pop("draft_for", None)
    if post_id:
        st.session_state["edit_post_id"] = post_id
    else:
        st.session_state.pop("edit_post_id", None)


def confirm_delete(token, post, next_page="dashboard"):
    """
    Shows the delete confirmation once a delete button was pressed for this post.
    """
    if st.session_state.get("confirm_delete") != post["id"]:
        return

    st.warning(f"⚠️ Delete '{post['title']}'? This cannot be undone.")
    confirm_cols = st.columns(2)
    with confirm_cols[0]:
        if st.button("Delete", key=f"confirm_del_{post['id']}"):
            result = delete_post(token, post["id"])
            st.session_state.pop("confirm_delete", None)
            if result.get("error"):
                st.error(f"Failed to delete post: {result['error']}")
            else:
                st.session_state["page"] = next_page
                st.success("Post deleted")
                st.rerun()
    with confirm_cols[1]:
        if st.button("Cancel", key=f"cancel_del_{post['id']}"):
            st.session_state.pop("confirm_delete", None)
            st.rerun()


def dashboard_page():
    token = st.session_state["access_token"]
    st.title("📊 Dashboard")

    if st.button("✏️ New Post"):
        open_editor()
        st.rerun()

    posts = list_my_posts(token)
    if isinstance(posts, dict) and posts.get("error"):
        st.error(posts["error"])
        return

    st.metric("Total posts", len(posts))

    if not posts:
        st.info("You haven't written anything yet. Write your first post!")
        return

    for post in posts:
        with st.container(border=True):
            cols = st.columns([6, 1, 1, 1])
            with cols[0]:
                st.markdown(f"**{post['title']}**")
                st.caption(f"Updated {time_ago(post['updated_at'])}")
            with cols[1]:
                if st.button("👁️", key=f"view_{post['id']}"):
                    st.session_state["page"] = "post"
                    st.session_state["post_id"] = post["id"]
                    st.rerun()
            with cols[2]:
                if st.button("✏️", key=f"edit_{post['id']}"):
                    open_editor(post["id"])
                    st.rerun()
            with cols[3]:
                if st.button("🗑️", key=f"del_{post['id']}"):
                    st.session_state["confirm_delete"] = post["id"]

            confirm_delete(token, post)
