# blogfusion_app/main.py

import streamlit as st
from dotenv import load_dotenv
from blogfusion_app.ui.login import login_page, logout, restore_session
from blogfusion_app.ui.feed import explore_page, post_page
from blogfusion_app.ui.dashboard import dashboard_page, open_editor
from blogfusion_app.ui.editor import editor_page
from blogfusion_app.ui.navigation import DEFAULT_PAGE, resolve_page, sidebar_entries


load_dotenv()


st.set_page_config(page_title="BlogFusion", layout="wide")

PAGES = {
    "explore": explore_page,
    "post": post_page,
    "login": login_page,
    "dashboard": dashboard_page,
    "editor": editor_page,
}


def sidebar(signed_in):
    if signed_in:
        st.sidebar.markdown(f"## 👋 {st.session_state['user']['name']}")
    else:
        st.sidebar.markdown("## 👋 Welcome to BlogFusion")

    for label, page in sidebar_entries(signed_in):
        if st.sidebar.button(label):
            if page == "editor":
                open_editor()
            else:
                st.session_state["page"] = page

    if signed_in and st.sidebar.button("🔓 Sign out"):
        logout()
        st.session_state.clear()
        st.rerun()


restore_session()

signed_in = "access_token" in st.session_state
sidebar(signed_in)

page = resolve_page(st.session_state.get("page", DEFAULT_PAGE), signed_in, PAGES)
PAGES[page]()
