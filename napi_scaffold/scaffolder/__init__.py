"""napi-scaffold scaffolder -- renders a new napi-rs project.

Quick usage::

    from napi_scaffold.scaffolder import ProjectConfig, ProjectGenerator

    project = ProjectConfig(
        name="@my-scope/my-addon",
        targets=["x86_64-unknown-linux-gnu", "x86_64-apple-darwin"],
    )
    result = ProjectGenerator(project).generate("./my-addon")
"""

from napi_scaffold.scaffolder.generator import (
    ProjectConfig,
    ProjectGenerator,
    ScaffoldError,
    ScaffoldResult,
)
from napi_scaffold.scaffolder.templates import TemplateRenderer, write_file

__all__ = [
    "ProjectConfig",
    "ProjectGenerator",
    "ScaffoldError",
    "ScaffoldResult",
    "TemplateRenderer",
    "write_file",
]
