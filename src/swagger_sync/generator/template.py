"""Endpoint template rendering.

A template is a Jinja2 file defining three macros: ``implement(inter)`` for
an endpoint's implementation file, ``header(inter)`` for its declaration in
``api.d.ts`` and ``common_header()`` for shared declarations. The rendered
text is not inspected.
"""

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from swagger_sync.parser.base import Interface

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = "endpoint.ts.j2"


def interface_context(inter: Interface) -> dict:
    """Template context for one endpoint, including its derived type strings."""
    return {
        **inter.model_dump(),
        "body_params": inter.body_params,
        "params_type": inter.params_type,
        "response_type": inter.response_type,
        "initial_value": inter.initial_value,
        "method": inter.method.upper(),
        "description": inter.summary,
    }


class TemplateRenderer:
    """Renders endpoints through the macros of a Jinja2 template."""

    def __init__(self, template_path: Path | None = None):
        if template_path is None:
            template_path = TEMPLATES_DIR / DEFAULT_TEMPLATE

        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        logger.debug("Loading endpoint template %s", template_path)
        self._module = env.get_template(template_path.name).module

    def implement(self, inter: Interface) -> str:
        return str(self._module.implement(interface_context(inter)))

    def header(self, inter: Interface) -> str:
        return str(self._module.header(interface_context(inter)))

    def common_header(self) -> str:
        return str(self._module.common_header())
