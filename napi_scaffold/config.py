"""napi-scaffold configuration.

Everything the generator needs besides the project itself: licence, the
napi crate versions written into ``Cargo.toml``, the minimum Node.js
version, the debug switch for the file writer and the policy applied to
targets the triple parser rejects.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

UnsupportedPolicy = Literal["error", "skip"]


class Config(BaseModel):
    """Global napi-scaffold configuration.

    Instances are created once by the CLI entry point (usually through
    :meth:`from_env`) and handed to ``ProjectGenerator``.
    """

    license: str = Field(default="MIT")
    napi_version: int = Field(default=2, ge=1)
    napi_derive_version: int = Field(default=2, ge=1)
    napi_build_version: int = Field(default=1, ge=1)
    min_node_version: str = Field(default="10")

    debug: bool = Field(
        default=False,
        description="Print rendered files instead of writing them",
    )
    on_unsupported: UnsupportedPolicy = Field(
        default="skip",
        description="What to do with targets whose triple cannot be parsed",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration from a JSON file (``napi-scaffold new --config``)."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            NAPI_DEBUG (any value enables debug mode),
            NAPI_SCAFFOLD_LICENSE, NAPI_SCAFFOLD_ON_UNSUPPORTED.
        """
        kwargs: dict[str, Any] = {"debug": "NAPI_DEBUG" in os.environ}
        if os.environ.get("NAPI_SCAFFOLD_LICENSE"):
            kwargs["license"] = os.environ["NAPI_SCAFFOLD_LICENSE"]
        if os.environ.get("NAPI_SCAFFOLD_ON_UNSUPPORTED"):
            kwargs["on_unsupported"] = os.environ["NAPI_SCAFFOLD_ON_UNSUPPORTED"]
        return cls(**kwargs)
