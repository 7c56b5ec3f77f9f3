"""Configuration types for file discovery."""

from __future__ import annotations

from dataclasses import dataclass, field

from inputscope.file_resolver.defaults import DEFAULT_EXTENSIONS
from inputscope.file_resolver.modes import AllowlistMode


@dataclass
class DiscoveryOptions:
    """
    Options for one discovery call.

    `depth=None` walks the whole tree; `depth=0` only looks at root-level files.
    An explicit `allowlist` replaces the rules derived from `allowlist_mode`;
    the default exclusions still come first unless `omit_default_allowlist`.
    `allowlist_mode=None` means autodetect.
    """

    depth: int | None = None
    extensions: list[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    allowlist: list[str] | None = None
    allowlist_mode: AllowlistMode | None = None
    omit_default_allowlist: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.allowlist_mode, str):
            self.allowlist_mode = AllowlistMode(self.allowlist_mode)
        if self.depth is not None and self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")

    def has_allowed_extension(self, filename: str) -> bool:
        return any(filename.endswith(ext) for ext in self.extensions)
