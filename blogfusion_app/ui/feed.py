# blogfusion_app/ui/feed.py

import streamlit as st
from blogfusion_app.services.api import list_posts, get_post
from blogfusion_app.ui.dashboard import confirm_delete, open_editor
from blogfusion_app.ui.display import byline, preview


def explore_page():
    st.title("🌍 Explore")

    # already newest first; shown as returned
    posts = list_posts()
    if isinstance(posts, dict) and posts.get("error"):
        st.error(posts["error"])
        return

    if not posts:
        st.info("No posts yet. Be the first to write one!")
        return

    for post in posts:
        with st.container(border=True):
            if post.get("cover_image"):
                st.image(post["cover_image"], use_container_width=True)
            st.subheader(post["title"])
            st.caption(byline(post))
            if post.get("category"):
                st.markdown(f"`{post['category']}`")
            st.write(preview(post))
            if st.button("Read more", key=f"read_{post['id']}"):
                st.session_state["page"] = "post"
                st.session_state["post_id"] = post["id"]
                st.rerun()


def is_author(post):
    user = st.session_state.get("user")
    return bool(user) and post["author_id"] == user["id"]


def post_page():
    post_id = st.session_state.get("post_id")
    if not post_id:
        st.session_state["page"] = "explore"
        st.rerun()

    if st.button("← Back"):
        st.session_state["page"] = "explore"
        st.rerun()

    post = get_post(post_id)
    if post.get("error"):
        st.error("Post not found" if post.get("status_code") == 404 else post["error"])
        return

    if is_author(post):
        cols = st.columns([1, 1, 6])
        with cols[0]:
            if st.button("✏️ Edit", key="edit_post"):
                open_editor(post["id"])
                st.rerun()
        with cols[1]:
            if st.button("🗑️ Delete", key="delete_post"):
                st.session_state["confirm_delete"] = post["id"]
        confirm_delete(st.session_state["access_token"], post)

    if post.get("cover_image"):
        st.image(post["cover_image"], use_container_width=True)
    st.title(post["title"])
    st.caption(byline(post))
    if post.get("category"):
        st.markdown(f"`{post['category']}`")
    # rendered as markdown; raw HTML from authors is not passed through
    st.markdown(post["content"])
    if post.get("tags"):
        st.markdown(" ".join(f"#{tag}" for tag in post["tags"]))

    author = post["author"]
    with st.container(border=True):
        if author.get("avatar"):
            st.image(author["avatar"], width=48)
        st.markdown(f"**{author['name']}** @{author['username']}")
        if author.get("bio"):
            st.write(author["bio"])
