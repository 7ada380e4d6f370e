"""Server-rendered pages: templates and form helpers."""

from taskboard.core.web.templating import render, templates, wants_json


__all__ = [
    "render",
    "templates",
    "wants_json",
]
