# blogfusion_app/ui/display.py

import re
from datetime import datetime, timezone

PREVIEW_LENGTH = 200
_TAG_RE = re.compile(r"<[^>]+>")


def strip_markup(text):
    return _TAG_RE.sub("", text or "").strip()


def preview(post, length=PREVIEW_LENGTH):
    """
    Excerpt if the author wrote one, otherwise the start of the body
    with markup removed.
    """
    if post.get("excerpt"):
        return post["excerpt"]
    text = strip_markup(post.get("content", ""))
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def time_ago(timestamp, now=None):
    created = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = max(int((now - created).total_seconds()), 0)

    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    return "just now"


def byline(post, now=None):
    return f"by {post['author']['name']} · {time_ago(post['created_at'], now)}"
