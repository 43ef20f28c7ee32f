# blogfusion_app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the FastAPI backend
FASTAPI_URL = os.getenv("FASTAPI_URL", "http://localhost:8000")

TIMEOUT = 30
# AI assistance waits on the upstream model
ASSIST_TIMEOUT = 120


def _auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}"}


def _error_from(res):
    try:
        detail = res.json().get("detail")
    except ValueError:
        detail = None
    if isinstance(detail, list):
        # FastAPI body validation errors
        detail = "; ".join(err.get("msg", "") for err in detail)
    return {"error": detail or f"Error: Status {res.status_code}", "status_code": res.status_code}


def _handle(res):
    if res.status_code == 200:
        return res.json()
    return _error_from(res)


# -------------------------------
# Authentication-related functions
# -------------------------------

def login_user(username, password):
    """
    Logs in a user and returns {"user": ..., "token": ...}.
    """
    try:
        res = requests.post(
            f"{FASTAPI_URL}/api/auth/login",
            json={"username": username, "password": password},
            timeout=TIMEOUT,
        )
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def register_user(username, password, name, bio=None, avatar=None):
    """
    Registers a new account. On success the response carries a token,
    so the user is logged in immediately.
    """
    payload = {"username": username, "password": password, "name": name}
    if bio:
        payload["bio"] = bio
    if avatar:
        payload["avatar"] = avatar
    try:
        res = requests.post(f"{FASTAPI_URL}/api/auth/register", json=payload, timeout=TIMEOUT)
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def get_user_info(access_token):
    """
    Retrieves the current user using the access token.
    A rejected token comes back with status_code 401; an unreachable
    server comes back as an error without a status code.
    """
    try:
        res = requests.get(f"{FASTAPI_URL}/api/auth/me", headers=_auth_headers(access_token), timeout=TIMEOUT)
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


# -------------------------
# Posts
# -------------------------

def list_posts():
    """
    Global feed, newest first as returned by the server.
    """
    try:
        res = requests.get(f"{FASTAPI_URL}/api/posts", timeout=TIMEOUT)
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def list_my_posts(access_token):
    try:
        res = requests.get(f"{FASTAPI_URL}/api/posts/my", headers=_auth_headers(access_token), timeout=TIMEOUT)
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def get_post(post_id):
    try:
        res = requests.get(f"{FASTAPI_URL}/api/posts/{post_id}", timeout=TIMEOUT)
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def create_post(access_token, post):
    try:
        res = requests.post(
            f"{FASTAPI_URL}/api/posts",
            json=post,
            headers=_auth_headers(access_token),
            timeout=TIMEOUT,
        )
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def update_post(access_token, post_id, changes):
    """
    Sends only the changed fields; the server leaves the rest untouched.
    """
    try:
        res = requests.patch(
            f"{FASTAPI_URL}/api/posts/{post_id}",
            json=changes,
            headers=_auth_headers(access_token),
            timeout=TIMEOUT,
        )
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


def delete_post(access_token, post_id):
    try:
        res = requests.delete(
            f"{FASTAPI_URL}/api/posts/{post_id}",
            headers=_auth_headers(access_token),
            timeout=TIMEOUT,
        )
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}


# -------------------------
# AI Writing Assistance
# -------------------------

def request_ai_assist(access_token, content, action, tone="professional"):
    """
    Asks the server to improve, expand or summarize a draft.
    Returns {"suggestion": ..., "action": ...} or {"error": ...}.
    """
    payload = {"content": content, "action": action, "tone": tone}
    try:
        res = requests.post(
            f"{FASTAPI_URL}/api/ai/assist",
            json=payload,
            headers=_auth_headers(access_token),
            timeout=ASSIST_TIMEOUT,
        )
        return _handle(res)
    except requests.RequestException as e:
        return {"error": str(e)}
