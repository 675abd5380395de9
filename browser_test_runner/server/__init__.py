"""Static asset serving for test pages and build artifacts."""

from browser_test_runner.server.app import AssetServer, serve_assets
from browser_test_runner.server.resolver import AssetResolver, ResolvedAsset, ServedRoute

__all__ = ["AssetResolver", "AssetServer", "ResolvedAsset", "ServedRoute", "serve_assets"]
