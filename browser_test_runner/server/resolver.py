"""Map request paths to files across the page and artifact directories."""

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

MIME_TYPES: Mapping[str, str] = {
    ".html": "text/html",
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".wasm": "application/wasm",
    ".whl": "application/zip",
    ".zip": "application/zip",
    ".py": "text/plain",
    ".json": "application/json",
    ".css": "text/css",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path | PurePosixPath) -> str:
    """Guess the content type from the file extension."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


@dataclass(frozen=True, kw_only=True)
class ServedRoute:
    """Rule routing request paths under ``prefix`` into ``root``."""

    prefix: str
    root: Path

    def matches(self, request_path: str) -> bool:
        """Check if the request path falls under this route."""
        return request_path.startswith(self.prefix)

    def relative_path(self, request_path: str) -> str:
        """Strip the route prefix from a matching request path."""
        return request_path.removeprefix(self.prefix)


@dataclass(frozen=True, kw_only=True)
class ResolvedAsset:
    """Outcome of resolving one request path.

    ``found`` is False when the file is missing or when the path would leave
    the route's root; ``file_path`` always names the attempted location.
    """

    root: Path
    relative_path: str
    file_path: Path
    found: bool

    @property
    def content_type(self) -> str:
        """Content type for the resolved file."""
        return content_type_for(self.file_path)


@dataclass(frozen=True, kw_only=True)
class AssetResolver:
    """Resolves request paths against routes checked in priority order.

    The last route is expected to be a catch-all ("/") so every request path
    resolves somewhere.
    """

    routes: Sequence[ServedRoute]

    @classmethod
    def for_test_page(
        cls, html_dir: Path, wheel_dir: Path, wheel_prefix: str = "/wasm-dist/"
    ) -> "AssetResolver":
        """Build the two routes: wheel prefix first, then the page directory."""
        return cls(
            routes=(
                ServedRoute(prefix=wheel_prefix, root=wheel_dir.resolve()),
                ServedRoute(prefix="/", root=html_dir.resolve()),
            )
        )

    def route_for(self, request_path: str) -> ServedRoute:
        """Return the first route matching the request path."""
        for route in self.routes:
            if route.matches(request_path):
                return route
        return self.routes[-1]

    def resolve(self, request_path: str) -> ResolvedAsset:
        """Resolve a request path to a file under exactly one root.

        Containment is checked on the normalised path, so symlinks inside a
        root are followed even when they point elsewhere.
        """
        route = self.route_for(request_path)
        relative = route.relative_path(request_path)
        file_path = Path(os.path.normpath(route.root / relative))

        return ResolvedAsset(
            root=route.root,
            relative_path=relative,
            file_path=file_path,
            found=file_path.is_relative_to(route.root) and file_path.is_file(),
        )
