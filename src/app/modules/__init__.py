"""Feature modules with auto-discovery."""

from importlib import import_module
from pathlib import Path
from types import ModuleType

import structlog


logger = structlog.get_logger()


def discover_modules() -> list[ModuleType]:
    """Import every feature package that exposes a ``router``.

    A feature package is a subdirectory with an ``__init__.py`` that
    defines ``router`` and, optionally, ``__module__`` metadata.

    Returns:
        The imported packages, in name order.
    """
    modules_dir = Path(__file__).parent
    found: list[ModuleType] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        if not (path / "__init__.py").exists():
            continue
        module = import_module(f"app.modules.{path.name}")
        if hasattr(module, "router"):
            found.append(module)
            logger.debug("module_loaded", module=path.name)

    return found


def module_info(module: ModuleType) -> dict:
    """Return a feature package's metadata, defaulting the name."""
    info = dict(getattr(module, "__module__", None) or {})
    info.setdefault("name", module.__name__.rsplit(".", 1)[-1])
    return info
