# src/taskly/ui/landing.py

from __future__ import annotations

TAGLINE = "A simple task management app"
GET_STARTED = "Get Started"


def render_landing(app_name: str = "Taskly") -> list[str]:
    """Landing screen: title, tagline and the single way in (/start)."""
    width = max(len(app_name), len(TAGLINE), len(GET_STARTED) + 12) + 4
    rule = "=" * width
    return [
        rule,
        app_name.center(width),
        TAGLINE.center(width),
        "",
        f"[ {GET_STARTED} ]  -> /start".center(width),
        rule,
    ]
