from pathlib import Path
from typing import List

from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

# Used instead of the mount layout when HTMX swaps only the page content
PARTIAL_LAYOUT = "<title>{{ title }}</title>\n{% block content %}{% endblock %}\n"


def build_templates(directories: List[Path]) -> Jinja2Templates:
    """Jinja2 templates searched across the sources in priority order."""
    env = Environment(
        loader=FileSystemLoader([str(d) for d in directories]),
        autoescape=select_autoescape(["html", "xml"]),
    )
    return Jinja2Templates(env=env)


def partial_layout(templates: Jinja2Templates) -> Template:
    return templates.env.from_string(PARTIAL_LAYOUT)
