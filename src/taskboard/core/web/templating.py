"""Server-side template rendering."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.responses import Response


TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    context: dict[str, Any] | None = None,
    status_code: int = 200,
) -> Response:
    """Render a template into an HTML response.

    Args:
        request: The current request (exposed to templates as ``request``)
        name: Template path relative to the templates directory
        context: Template variables
        status_code: HTTP status of the response

    Returns:
        The rendered response
    """
    return templates.TemplateResponse(
        request,
        name,
        context or {},
        status_code=status_code,
    )


def wants_json(request: Request) -> bool:
    """Whether the client talks JSON rather than HTML pages."""
    accept = request.headers.get("accept", "")
    content_type = request.headers.get("content-type", "")
    return "application/json" in accept or content_type.startswith("application/json")
