# blogfusion_app/ui/editor.py

import streamlit as st
from blogfusion_app.services.api import create_post, get_post, update_post, request_ai_assist

AI_ACTIONS = {
    "improve": "✨ Improve",
    "expand": "➕ Expand",
    "summarize": "📝 Summarize",
}

EDITABLE_FIELDS = ("title", "content", "excerpt", "cover_image", "category", "tags")

# draft_for marker for an unsaved post, distinct from "no draft loaded"
NEW_DRAFT = "__new__"


def parse_tags(raw):
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def changed_fields(original, form):
    """
    Fields whose value differs from the stored post, for a partial update.
    """
    return {field: form[field] for field in EDITABLE_FIELDS if form[field] != original.get(field)}


def draft_key(post_id):
    return post_id or NEW_DRAFT


def load_draft():
    post_id = st.session_state.get("edit_post_id")
    if st.session_state.get("draft_for") == draft_key(post_id):
        return

    draft = {"title": "", "content": "", "excerpt": "", "cover_image": "", "category": "", "tags": ""}
    if post_id:
        post = get_post(post_id)
        if post.get("error"):
            st.error(post["error"])
            return
        if post["author_id"] != st.session_state["user"]["id"]:
            st.error("You can only edit your own posts.")
            return
        st.session_state["original_post"] = post
        draft.update({field: post.get(field) or "" for field in draft if field != "tags"})
        draft["tags"] = ", ".join(post.get("tags", []))

    for field, value in draft.items():
        st.session_state[f"draft_{field}"] = value
    st.session_state["draft_for"] = draft_key(post_id)
    st.session_state.pop("ai_suggestion", None)


def editor_page():
    token = st.session_state["access_token"]
    post_id = st.session_state.get("edit_post_id")
    st.title("✏️ Edit Post" if post_id else "✏️ New Post")

    load_draft()
    if st.session_state.get("draft_for") != draft_key(post_id):
        return

    st.text_input("Title", key="draft_title")
    st.text_area("Content", key="draft_content", height=320)

    with st.expander("🤖 AI writing assistant"):
        cols = st.columns(len(AI_ACTIONS))
        for col, (action, label) in zip(cols, AI_ACTIONS.items()):
            with col:
                if st.button(label, key=f"ai_{action}"):
                    handle_ai_assist(token, action)

        suggestion = st.session_state.get("ai_suggestion")
        if suggestion:
            st.markdown("**Suggestion**")
            st.write(suggestion)
            st.button("Use this suggestion", on_click=apply_suggestion)

    st.text_input("Excerpt (optional)", key="draft_excerpt")
    st.text_input("Cover image URL (optional)", key="draft_cover_image")
    st.text_input("Category (optional)", key="draft_category")
    st.text_input("Tags (comma separated)", key="draft_tags")

    cols = st.columns(2)
    with cols[0]:
        if st.button("💾 Save"):
            save_post(token, post_id)
    with cols[1]:
        if st.button("Cancel"):
            st.session_state["page"] = "dashboard"
            st.session_state.pop("draft_for", None)
            st.rerun()


def apply_suggestion():
    # widget values can only be replaced from a callback, before the rerun
    st.session_state["draft_content"] = st.session_state.pop("ai_suggestion")


def handle_ai_assist(token, action):
    content = st.session_state.get("draft_content", "")
    if not content.strip():
        st.warning("Write some content first.")
        return
    with st.spinner("Asking the assistant..."):
        result = request_ai_assist(token, content, action)
    if result.get("error"):
        st.error(f"AI assistance failed: {result['error']}")
    else:
        st.session_state["ai_suggestion"] = result["suggestion"]


def save_post(token, post_id):
    form = {
        "title": st.session_state["draft_title"].strip(),
        "content": st.session_state["draft_content"],
        "excerpt": st.session_state["draft_excerpt"].strip() or None,
        "cover_image": st.session_state["draft_cover_image"].strip() or None,
        "category": st.session_state["draft_category"].strip() or None,
        "tags": parse_tags(st.session_state["draft_tags"]),
    }
    if not form["title"] or not form["content"].strip():
        st.error("Title and content are required.")
        return

    if post_id:
        changes = changed_fields(st.session_state["original_post"], form)
        result = update_post(token, post_id, changes) if changes else st.session_state["original_post"]
    else:
        result = create_post(token, form)

    if result.get("error"):
        st.error(f"Failed to save post: {result['error']}")
        return

    st.session_state.pop("draft_for", None)
    st.session_state["page"] = "post"
    st.session_state["post_id"] = result["id"]
    st.rerun()
