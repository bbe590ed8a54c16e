"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``napi_scaffold/scaffolder/templates/`` directory and renders them with
project-specific context data, plus the ``write_file`` helper every
generated file goes through.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.markup import escape

from ..utils import console, package_name_to_crate_name


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for project scaffolding.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Templates are rendered with a context dictionary
    that typically contains package metadata (name, targets, licence, etc.).
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        *,
        debug: bool = False,
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.debug = debug
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["crate_name"] = package_name_to_crate_name

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"Cargo.toml.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- File-based rendering ----------------------------------------------

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.  In debug mode the
        rendered text is printed instead.
        """
        content = self.render(template_path, context)
        return write_file(output_path, content, debug=self.debug)


# ---------------------------------------------------------------------------
# File writing
# ---------------------------------------------------------------------------


def write_file(path: str | Path, content: str, *, debug: bool = False) -> Path:
    """Write *content* to *path*, creating parent directories.

    With ``debug=True`` nothing touches the disk; the content is echoed to
    the console below the ``Writing file`` line.
    """
    out = Path(path)
    console.print(f"Writing file: {escape(str(out))}", highlight=False)
    if debug:
        console.print(content, markup=False, highlight=False)
    else:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(content, encoding="utf-8")
    return out
