# Standard library imports
from typing import Any, Callable, Dict, Hashable


class BaseContainer:
    """
    Minimal dependency injection container.

    Keys are usually interface classes (e.g. UserRepository) or plain names
    (e.g. "user_collection"). Singletons are stored as instances; factories
    are called on every get().
    """

    def __init__(self) -> None:
        self._singletons: Dict[Hashable, Any] = {}
        self._factories: Dict[Hashable, Callable[[], Any]] = {}

    def register_singleton(self, key: Hashable, instance: Any) -> None:
        self._singletons[key] = instance
        self._factories.pop(key, None)

    def register_factory(self, key: Hashable, factory: Callable[[], Any]) -> None:
        self._factories[key] = factory
        self._singletons.pop(key, None)

    def get(self, key: Hashable) -> Any:
        """
        Resolve a registered dependency

        Raises:
            KeyError: If nothing is registered under key
        """
        if key in self._singletons:
            return self._singletons[key]
        if key in self._factories:
            return self._factories[key]()
        name = getattr(key, "__name__", key)
        raise KeyError(f"No dependency registered for {name}")
