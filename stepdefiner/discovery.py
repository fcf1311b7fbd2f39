"""Find StepDefiner subclasses in modules and packages.

Modules are imported by dotted name. Packages are walked so that every
submodule gets imported, which is what makes definers in a ``step_defs``
package available without listing each file.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Iterator, List, Type

from .definer import StepDefiner

logger = logging.getLogger(__name__)


def iter_modules(*names: str) -> Iterator[ModuleType]:
    """Import each named module, and every submodule of named packages."""
    for name in names:
        module = importlib.import_module(name)
        yield module
        path = getattr(module, "__path__", None)
        if path is None:
            continue
        for info in pkgutil.walk_packages(path, prefix=f"{module.__name__}."):
            yield importlib.import_module(info.name)


def _is_concrete(cls: type) -> bool:
    return not cls.__dict__.get("abstract", False)


def _definition_line(cls: type) -> int:
    try:
        return inspect.getsourcelines(cls)[1]
    except (OSError, TypeError):
        return 0


def collect_definers(*names: str) -> List[Type[StepDefiner]]:
    """StepDefiner subclasses defined in the named modules.

    Classes merely imported into a module are not picked up there. The
    result is ordered by module name, then by position in the source.
    """
    found = []
    seen = set()
    for module in iter_modules(*names):
        for _, cls in inspect.getmembers(module, inspect.isclass):
            if cls in seen or cls.__module__ != module.__name__:
                continue
            if issubclass(cls, StepDefiner) and cls is not StepDefiner and _is_concrete(cls):
                seen.add(cls)
                found.append(cls)
    found.sort(key=lambda c: (c.__module__, _definition_line(c)))
    logger.debug("Collected %d step definers from %s", len(found), ", ".join(names))
    return found


def all_definers() -> List[Type[StepDefiner]]:
    """Every concrete StepDefiner subclass loaded in this process."""
    found = []
    pending = list(StepDefiner.__subclasses__())
    while pending:
        cls = pending.pop(0)
        if cls in found:
            continue
        if _is_concrete(cls):
            found.append(cls)
        pending.extend(cls.__subclasses__())
    return found
