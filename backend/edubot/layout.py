"""
Page shells for the HTML pages the API serves itself.
Paths under /admin get the bare admin shell (the admin app draws its own navigation);
everything else gets the default shell with the site header.
"""
from html import escape
from typing import Literal

ADMIN_PREFIX = "/admin"

Shell = Literal["admin", "default"]


def select_shell(path: str) -> Shell:
    p = path or "/"
    if p == ADMIN_PREFIX or p.startswith(ADMIN_PREFIX + "/"):
        return "admin"
    return "default"


_HEAD = '<!DOCTYPE html>\n<html>\n<head><meta charset="utf-8"><title>{title}</title></head>\n'

_ADMIN_SHELL = _HEAD + """<body class="admin" style="font-family: system-ui; margin: 0;">
<main style="padding: 1.5rem;">{body}</main>
</body>
</html>
"""

_DEFAULT_SHELL = _HEAD + """<body style="font-family: system-ui; max-width: 600px; margin: 2rem auto; padding: 1rem;">
<header><strong>Edutech Chatbot</strong></header>
<main>{body}</main>
</body>
</html>
"""


def render_page(path: str, title: str, body: str) -> str:
    """Wrap body (trusted HTML) in the shell chosen for path; title is escaped."""
    shell = _ADMIN_SHELL if select_shell(path) == "admin" else _DEFAULT_SHELL
    return shell.format(title=escape(title), body=body)
