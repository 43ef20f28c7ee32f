# blogfusion_app/ui/login.py

import os
import json
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from blogfusion_app.services.api import login_user, register_user, get_user_info

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD")

cookies = EncryptedCookieManager(prefix="blogfusion/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def remember(result):
    st.session_state["access_token"] = result["token"]
    st.session_state["user"] = result["user"]
    cookies["access_token"] = result["token"]
    cookies["user"] = json.dumps(result["user"])
    cookies.save()


def restore_session():
    """
    Picks up a token saved in cookies, dropping it only if the server rejects it.
    """
    if "access_token" in st.session_state or not cookies.get("access_token"):
        return
    token = cookies["access_token"]
    result = get_user_info(token)
    if result.get("status_code") == 401:
        logout()
        return
    if result.get("error"):
        # unreachable, not rejected: the cookie stays for the next run
        st.warning(f"Could not restore your session: {result['error']}")
        return
    st.session_state["access_token"] = token
    st.session_state["user"] = result


def logout():
    cookies["access_token"] = ""
    cookies["user"] = ""
    cookies.save()


def login_page():
    st.title("🔐 Sign in to BlogFusion")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        with st.spinner("Signing in..."):
            result = login_user(username, password)
            if result.get("error"):
                st.error(f"❌ Login failed: {result['error']}")
            else:
                remember(result)
                st.session_state["page"] = "dashboard"
                st.success("✅ Welcome back!")
                st.rerun()

    if st.button("Create an account"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Create an account")

    with st.form("register_form"):
        name = st.text_input("Display name")
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        bio = st.text_area("Bio (optional)")
        avatar = st.text_input("Avatar image URL (optional)")
        submitted = st.form_submit_button("Sign up")

    if submitted:
        with st.spinner("Creating your account..."):
            result = register_user(username, password, name, bio.strip(), avatar.strip())
            if result.get("error"):
                st.error(f"❌ Registration failed: {result['error']}")
            else:
                remember(result)
                st.session_state["show_register"] = False
                st.session_state["page"] = "dashboard"
                st.success("🎉 Welcome to BlogFusion!")
                st.rerun()

    if st.button("← Back to sign in"):
        st.session_state["show_register"] = False
        st.rerun()
