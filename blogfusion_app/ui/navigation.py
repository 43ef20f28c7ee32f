# blogfusion_app/ui/navigation.py

# Pages that need a signed-in user; everything else is open to readers
PROTECTED_PAGES = ("dashboard", "editor")
DEFAULT_PAGE = "explore"


def sidebar_entries(signed_in):
    if signed_in:
        return [
            ("🌍 Explore", "explore"),
            ("📊 Dashboard", "dashboard"),
            ("✏️ New Post", "editor"),
        ]
    return [
        ("🌍 Explore", "explore"),
        ("🔐 Sign in", "login"),
    ]


def resolve_page(page, signed_in, known_pages):
    """
    Picks the page to render. Anonymous visitors asking for an author page
    are sent to sign in; signed-in users never see the sign-in page.
    """
    if page not in known_pages:
        return DEFAULT_PAGE
    if page in PROTECTED_PAGES and not signed_in:
        return "login"
    if page == "login" and signed_in:
        return DEFAULT_PAGE
    return page
