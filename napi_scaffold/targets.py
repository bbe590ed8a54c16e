"""Compiler target triples and their Node.js platform naming.

A target triple such as ``x86_64-unknown-linux-musl`` names a toolchain
target as ``<cpu>-<vendor>-<system>[-<abi>]``.  Native addon packages on npm
are named after Node's own ``process.platform`` / ``process.arch`` values
instead, e.g. ``linux-x64-musl``.  This module maps the former onto the
latter.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict
from rich.markup import escape

from .utils import print_warning


# ---------------------------------------------------------------------------
# Target catalogues
# ---------------------------------------------------------------------------

AVAILABLE_TARGETS: tuple[str, ...] = (
    "aarch64-apple-darwin",
    "aarch64-linux-android",
    "aarch64-unknown-linux-gnu",
    "aarch64-unknown-linux-musl",
    "aarch64-pc-windows-msvc",
    "x86_64-apple-darwin",
    "x86_64-pc-windows-msvc",
    "x86_64-unknown-linux-gnu",
    "x86_64-unknown-linux-musl",
    "x86_64-unknown-freebsd",
    "i686-pc-windows-msvc",
    "armv7-unknown-linux-gnueabihf",
    "armv7-linux-androideabi",
)

DEFAULT_TARGETS: tuple[str, ...] = (
    "x86_64-apple-darwin",
    "x86_64-pc-windows-msvc",
    "x86_64-unknown-linux-gnu",
)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class TripleError(ValueError):
    """Base class for target triples that cannot be parsed."""

    def __init__(self, value: str, message: str) -> None:
        self.value = value
        super().__init__(message)


class MalformedTripleError(TripleError):
    """Raised when a triple has fewer than three dash-separated segments."""

    def __init__(self, triple: str) -> None:
        super().__init__(
            triple,
            f"malformed target triple {triple!r}: expected <cpu>-<vendor>-<system>[-<abi>]",
        )


class UnsupportedArchitectureError(TripleError):
    """Raised when the cpu segment of a triple has no Node.js arch name."""

    def __init__(self, cpu: str) -> None:
        super().__init__(cpu, f"unsupported cpu arch {cpu}")


class DuplicatePlatformError(TripleError):
    """Raised when two triples resolve to the same ``platform_abi``."""

    def __init__(self, triple: str, other: str, platform_abi: str) -> None:
        self.other = other
        self.platform_abi = platform_abi
        super().__init__(
            triple,
            f"target {triple} maps to {platform_abi}, already used by {other}",
        )


# ---------------------------------------------------------------------------
# Architecture
# ---------------------------------------------------------------------------


class NodeArch(str, Enum):
    """CPU architectures as reported by Node's ``process.arch``."""

    X32 = "x32"
    X64 = "x64"
    IA32 = "ia32"
    ARM = "arm"
    ARM64 = "arm64"
    MIPS = "mips"
    MIPSEL = "mipsel"
    PPC = "ppc"
    PPC64 = "ppc64"
    S390 = "s390"
    S390X = "s390x"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_cpu(cls, cpu: str) -> "NodeArch":
        """Map the cpu segment of a triple to its Node.js arch.

        Raises:
            UnsupportedArchitectureError: If *cpu* is not in the table.
        """
        try:
            return _CPU_TABLE[cpu]
        except KeyError:
            raise UnsupportedArchitectureError(cpu) from None


# "arrch64" is spelled this way in the table napi-rs shipped with, so
# "aarch64-*" triples are rejected. See DESIGN.md before changing it.
_CPU_TABLE: dict[str, NodeArch] = {
    "x32": NodeArch.X32,
    "x86_64": NodeArch.X64,
    "i686": NodeArch.IA32,
    "armv7": NodeArch.ARM,
    "arrch64": NodeArch.ARM64,
    "mips": NodeArch.MIPS,
    "mipsel": NodeArch.MIPSEL,
    "ppc": NodeArch.PPC,
    "ppc64": NodeArch.PPC64,
    "s390": NodeArch.S390,
    "s390x": NodeArch.S390X,
}


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------


class NodePlatform(BaseModel):
    """An operating system as reported by Node's ``process.platform``.

    Known systems compare equal to the module constants (``DARWIN`` etc.).
    Anything else is kept verbatim through :meth:`unknown`, which is how
    ``linux`` triples come out.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    known: bool = True

    def __str__(self) -> str:
        return self.name

    @classmethod
    def unknown(cls, system: str) -> "NodePlatform":
        return cls(name=system, known=False)

    @classmethod
    def from_system(cls, system: str) -> "NodePlatform":
        """Map the system segment of a triple to its Node.js platform."""
        platform = _SYSTEM_TABLE.get(system)
        if platform is None:
            return cls.unknown(system)
        return platform


DARWIN = NodePlatform(name="darwin")
FREEBSD = NodePlatform(name="freebsd")
OPENBSD = NodePlatform(name="openbsd")
WIN32 = NodePlatform(name="win32")

_SYSTEM_TABLE: dict[str, NodePlatform] = {
    "darwin": DARWIN,
    "freebsd": FREEBSD,
    "openbsd": OPENBSD,
    "windows": WIN32,
}


# ---------------------------------------------------------------------------
# Platform descriptor
# ---------------------------------------------------------------------------


class PlatformDetail(BaseModel):
    """A target triple resolved to Node.js naming."""

    model_config = ConfigDict(frozen=True)

    triple: str
    platform_abi: str
    arch: NodeArch
    platform: NodePlatform
    abi: Optional[str] = None

    @classmethod
    def from_triple(cls, triple: str) -> "PlatformDetail":
        """Parse *triple* into a descriptor.

        The vendor segment is ignored; a fourth segment, when present,
        becomes the abi.

        Raises:
            MalformedTripleError: Fewer than three segments.
            UnsupportedArchitectureError: Unknown cpu segment.
        """
        parts = triple.split("-")
        if len(parts) < 3:
            raise MalformedTripleError(triple)

        cpu, system = parts[0], parts[2]
        abi = parts[3] if len(parts) > 3 else None

        platform = NodePlatform.from_system(system)
        arch = NodeArch.from_cpu(cpu)

        if abi is not None:
            platform_abi = f"{platform}-{arch}-{abi}"
        else:
            platform_abi = f"{platform}-{arch}"

        return cls(
            triple=triple,
            platform_abi=platform_abi,
            arch=arch,
            platform=platform,
            abi=abi,
        )


def parse_triple(triple: str) -> PlatformDetail:
    """Shorthand for :meth:`PlatformDetail.from_triple`."""
    return PlatformDetail.from_triple(triple)


# ---------------------------------------------------------------------------
# Batch resolution
# ---------------------------------------------------------------------------


def resolve_targets(
    triples: Iterable[str],
    on_unsupported: Literal["error", "skip"] = "skip",
) -> tuple[list[PlatformDetail], list[str]]:
    """Parse every triple in *triples*, applying the unsupported-target policy.

    A triple whose ``platform_abi`` was already produced by an earlier one
    counts as a failure too, since both would claim the same npm package.
    With ``"error"`` the first :class:`TripleError` propagates.  With
    ``"skip"`` failing triples are reported and left out.

    Returns:
        A ``(details, skipped)`` tuple, both in input order.
    """
    details: list[PlatformDetail] = []
    skipped: list[str] = []
    claimed: dict[str, str] = {}

    for triple in triples:
        try:
            detail = PlatformDetail.from_triple(triple)
            if detail.platform_abi in claimed:
                raise DuplicatePlatformError(
                    triple, claimed[detail.platform_abi], detail.platform_abi
                )
        except TripleError as exc:
            if on_unsupported == "error":
                raise
            print_warning(f"Skipping target {escape(triple)}: {escape(str(exc))}")
            skipped.append(triple)
            continue
        claimed[detail.platform_abi] = triple
        details.append(detail)

    return details, skipped
