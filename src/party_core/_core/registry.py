# Area: Core
"""
party_core._core.registry — Game module registry
================================================

Holds the game modules a host can load, keyed by module id.
The registry is an explicit value created by the host at startup
and passed around; there is no process-wide module table.

Usage:
    registry = ModuleRegistry()
    registry.register(NameBlameModule())
    module = registry.require("nameblame")
"""

import logging
from typing import Any, Dict, Iterator, List, Optional

from ..errors import DuplicateModuleError, ModuleNotRegisteredError

logger = logging.getLogger("party_core.registry")

REQUIRED_MEMBERS = ("init", "register_screens", "get_phase_controllers")


class ModuleRegistry:
    """
    Registry of game modules.

    Maintains one module per id and rejects duplicates.
    """

    def __init__(self, modules: Optional[List[Any]] = None):
        """Initialize registry, optionally pre-registering modules."""
        self._modules: Dict[str, Any] = {}
        for module in modules or []:
            self.register(module)

    def register(self, module: Any) -> None:
        """
        Register a game module.

        Args:
            module: Object implementing the GameModule contract

        Raises:
            TypeError: If the module does not implement the contract
            DuplicateModuleError: If a module with the same id exists
        """
        validate_module(module)
        if module.id in self._modules:
            raise DuplicateModuleError(module.id)
        self._modules[module.id] = module
        logger.debug(f"Registered module {module.id}")

    def unregister(self, module_id: str) -> None:
        """Remove a module; unknown ids are ignored."""
        if self._modules.pop(module_id, None) is not None:
            logger.debug(f"Unregistered module {module_id}")

    def get(self, module_id: str) -> Optional[Any]:
        """
        Get a module by id.

        Returns:
            The module if registered, None otherwise
        """
        return self._modules.get(module_id)

    def require(self, module_id: str) -> Any:
        """
        Get a module by id or fail.

        Raises:
            ModuleNotRegisteredError: If no module has this id
        """
        module = self._modules.get(module_id)
        if module is None:
            raise ModuleNotRegisteredError(module_id)
        return module

    def has(self, module_id: str) -> bool:
        return module_id in self._modules

    def list_modules(self) -> List[Any]:
        """All registered modules, in registration order."""
        return list(self._modules.values())

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __iter__(self) -> Iterator[Any]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)


def validate_module(module: Any) -> None:
    """
    Check that an object implements the required module members.

    Raises:
        TypeError: Listing every missing or invalid member
    """
    problems = []
    module_id = getattr(module, "id", None)
    if not isinstance(module_id, str) or not module_id:
        problems.append("id must be a non-empty string")
    for name in REQUIRED_MEMBERS:
        if not callable(getattr(module, name, None)):
            problems.append(f"{name}() is missing")
    if problems:
        raise TypeError(f"Invalid game module {module!r}: {', '.join(problems)}")
