"""napi-scaffold: bootstrap napi-rs native addon projects."""

from napi_scaffold.targets import (
    AVAILABLE_TARGETS,
    DEFAULT_TARGETS,
    DuplicatePlatformError,
    MalformedTripleError,
    NodeArch,
    NodePlatform,
    PlatformDetail,
    TripleError,
    UnsupportedArchitectureError,
    parse_triple,
    resolve_targets,
)

__version__ = "0.1.0"

__all__ = [
    "AVAILABLE_TARGETS",
    "DEFAULT_TARGETS",
    "DuplicatePlatformError",
    "MalformedTripleError",
    "NodeArch",
    "NodePlatform",
    "PlatformDetail",
    "TripleError",
    "UnsupportedArchitectureError",
    "parse_triple",
    "resolve_targets",
]
