# crawl_proxy/__init__.py
"""
crawl_proxy package initializer.
Defines package version and exposes CLI.
"""
__version__ = "0.1.0"

from crawl_proxy.cli import cli  # noqa: E402

__all__ = ["__version__", "cli"]
