"""Prompt text derived from the host identity."""

from __future__ import annotations

import getpass
import os
import socket

DEFAULT_TEMPLATE = "{host})-> "
FALLBACK_PROMPT = "> "


def current_prompt(template: str | None = None) -> str:
    """Build the prompt string.

    The template may reference ``{host}``, ``{user}`` and ``{cwd}``. Without
    a template the prompt is ``"<hostname>)-> "``, or ``"> "`` when the
    hostname cannot be determined.
    """
    try:
        host = socket.gethostname()
    except OSError:
        host = ""

    if template is None:
        return DEFAULT_TEMPLATE.format(host=host) if host else FALLBACK_PROMPT

    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = ""
    try:
        cwd = os.getcwd()
    except OSError:
        cwd = ""
    home = os.path.expanduser("~")
    if home and home != "~" and cwd.startswith(home):
        cwd = "~" + cwd[len(home) :]

    try:
        return template.format(host=host, user=user, cwd=cwd)
    except (KeyError, IndexError, ValueError):
        return template
