"""Jinja2 template renderer. Template id + suffix names a file in the template directory."""

from pathlib import Path
from typing import Any, Mapping, Optional

from jinja2 import BaseLoader, Environment, FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound


class TemplateRenderError(Exception):
    """Raised when a template is unknown or fails to render."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class JinjaTemplateRenderer:
    """Renders plain-text message templates. Implements TemplateRenderer protocol."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        suffix: str = ".txt.j2",
        loader: Optional[BaseLoader] = None,
    ) -> None:
        if loader is None:
            if template_dir is None:
                raise ValueError("either template_dir or loader is required")
            loader = FileSystemLoader(str(template_dir))
        self._suffix = suffix
        self._env = Environment(
            loader=loader,
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def render(self, template_id: str, context: Mapping[str, Any]) -> str:
        name = f"{template_id}{self._suffix}"
        try:
            template = self._env.get_template(name)
            return template.render(**context)
        except TemplateNotFound as e:
            raise TemplateRenderError(f"template <{name}> not found") from e
        except TemplateError as e:
            raise TemplateRenderError(f"template <{name}> failed to render: {e}") from e
