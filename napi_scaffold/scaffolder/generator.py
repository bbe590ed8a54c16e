"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and generates a napi-rs project directory:
``Cargo.toml``, ``package.json``, ``build.rs`` and ``src/lib.rs``, one npm
sub-package per supported target and, optionally, a GitHub Actions build
workflow.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..config import Config
from ..targets import DARWIN, WIN32, PlatformDetail, resolve_targets
from ..utils import package_name_to_binary_name, package_name_to_crate_name
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Raised when the project directory cannot be prepared or written."""


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to scaffold."""

    name: str = Field(..., min_length=1, description="npm package name, may be scoped")
    targets: list[str] = Field(..., min_length=1, description="Target triples to build for")
    type_def: bool = Field(default=False, description="Enable the napi-derive type-def feature")
    github_actions: bool = Field(default=False, description="Generate a CI workflow")

    @field_validator("targets")
    @classmethod
    def _dedupe_targets(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))

    @property
    def crate_name(self) -> str:
        return package_name_to_crate_name(self.name)

    @property
    def binary_name(self) -> str:
        return package_name_to_binary_name(self.name)


class ScaffoldResult(BaseModel):
    """What a ``ProjectGenerator.generate`` run produced."""

    root: Path
    files: list[Path] = Field(default_factory=list)
    platforms: list[PlatformDetail] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a ``ProjectConfig``, generates:
    - ``Cargo.toml`` with the napi dependencies
    - ``package.json`` listing every requested triple
    - ``build.rs`` and ``src/lib.rs`` stubs
    - ``npm/<platform-abi>/`` packages for each target that parses
    - ``.github/workflows/CI.yml`` when requested
    """

    def __init__(self, project: ProjectConfig, config: Optional[Config] = None) -> None:
        self.project = project
        self.config = config or Config()
        self.renderer = TemplateRenderer(debug=self.config.debug)

    # -- Public API --------------------------------------------------------

    def generate(self, output_dir: str | Path) -> ScaffoldResult:
        """Generate the project into *output_dir*.

        *output_dir* is the project root itself.  It is created if missing
        and reused if it already exists.

        Raises:
            ScaffoldError: The directory could not be created or a file
                could not be written.
            TripleError: A target failed to parse and the configured policy
                is ``"error"``.
        """
        platforms, skipped = resolve_targets(
            self.project.targets, self.config.on_unsupported
        )

        root = Path(output_dir)
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ScaffoldError(f"Failed to create directory {root}: {exc}") from exc

        result = ScaffoldResult(root=root, platforms=platforms, skipped=skipped)
        context = self._build_context(platforms)

        try:
            result.files.append(self._render_cargo_toml(root, context))
            result.files.extend(self._render_lib_files(root, context))
            result.files.append(self._render_package_json(root, context))
            result.files.extend(self._render_npm_packages(root, context, platforms))
            if self.project.github_actions and platforms:
                result.files.append(self._render_ci(root, context, platforms))
        except OSError as exc:
            raise ScaffoldError(str(exc)) from exc

        return result

    # -- Context building --------------------------------------------------

    def _build_context(self, platforms: list[PlatformDetail]) -> dict[str, Any]:
        """Build the Jinja2 template context from the project and config."""
        return {
            "name": self.project.name,
            "binary_name": self.project.binary_name,
            "targets": self.project.targets,
            "platforms": platforms,
            "type_def": self.project.type_def,
            "license": self.config.license,
            "napi_version": self.config.napi_version,
            "napi_derive_version": self.config.napi_derive_version,
            "napi_build_version": self.config.napi_build_version,
            "min_node_version": self.config.min_node_version,
        }

    # -- Manifests ---------------------------------------------------------

    def _render_cargo_toml(self, root: Path, ctx: dict[str, Any]) -> Path:
        return self.renderer.render_to_file("Cargo.toml.j2", root / "Cargo.toml", ctx)

    def _render_lib_files(self, root: Path, ctx: dict[str, Any]) -> list[Path]:
        return [
            self.renderer.render_to_file("src/lib.rs.j2", root / "src" / "lib.rs", ctx),
            self.renderer.render_to_file("build.rs.j2", root / "build.rs", ctx),
        ]

    def _render_package_json(self, root: Path, ctx: dict[str, Any]) -> Path:
        return self.renderer.render_to_file("package.json.j2", root / "package.json", ctx)

    # -- Per-target packages -----------------------------------------------

    def _render_npm_packages(
        self,
        root: Path,
        ctx: dict[str, Any],
        platforms: list[PlatformDetail],
    ) -> list[Path]:
        """Render ``npm/<platform-abi>/{package.json,README.md}`` per target."""
        written: list[Path] = []
        for platform in platforms:
            target_ctx = {**ctx, "platform": platform, "libc": _libc_for(platform)}
            target_dir = root / "npm" / platform.platform_abi
            written.append(
                self.renderer.render_to_file(
                    "npm/package.json.j2", target_dir / "package.json", target_ctx
                )
            )
            written.append(
                self.renderer.render_to_file(
                    "npm/README.md.j2", target_dir / "README.md", target_ctx
                )
            )
        return written

    # -- CI/CD -------------------------------------------------------------

    def _render_ci(
        self,
        root: Path,
        ctx: dict[str, Any],
        platforms: list[PlatformDetail],
    ) -> Path:
        """Render the GitHub Actions build matrix."""
        matrix = [
            {"host": _runner_for(platform), "target": platform.triple}
            for platform in platforms
        ]
        return self.renderer.render_to_file(
            "github/workflows/CI.yml.j2",
            root / ".github" / "workflows" / "CI.yml",
            {**ctx, "matrix": matrix},
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _libc_for(platform: PlatformDetail) -> Optional[str]:
    """Return the npm ``libc`` value for linux gnu/musl targets, else ``None``."""
    if str(platform.platform) != "linux" or platform.abi is None:
        return None
    if platform.abi.startswith("musl"):
        return "musl"
    if platform.abi.startswith("gnu"):
        return "glibc"
    return None


def _runner_for(platform: PlatformDetail) -> str:
    """Pick the GitHub-hosted runner image that builds *platform*."""
    if platform.platform == DARWIN:
        return "macos-latest"
    if platform.platform == WIN32:
        return "windows-latest"
    return "ubuntu-latest"
