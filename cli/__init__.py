"""CLI package: remote Typer client and the in-process interactive menu."""

from importlib import import_module
from types import ModuleType


def __getattr__(name: str) -> ModuleType:
    if name in {"app", "menu"}:
        return import_module(f"cli.{name}")
    raise AttributeError(name)

# ``cli.app`` stays a module rather than the Typer instance so tests can patch
# attributes such as ``cli.app.ApiClient`` on it.

__all__ = []
