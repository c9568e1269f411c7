"""Dependency injection container.

Binds the ports of the application to concrete adapters so front ends
(the CLI, tests) can ask for a ready MetroQueryService without knowing
which file format backs the graph.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(MetroQueryService)

        # Testing
        container = Container()
        container.register(GraphRepositoryPort, lambda: InMemoryRepository(graph))
        repository = container.resolve(GraphRepositoryPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Registering a type again replaces its factory and drops any
        instance already built from the previous one.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The graph repository follows ``config.graph.source``; the fare
        calculator is built from ``config.fares``.
        """
        from .adapters.graph import CSVGraphRepository, TimetableGraphRepository
        from .adapters.rendering import TextPathRenderer
        from .ports.graph import GraphRepositoryPort
        from .ports.rendering import PathRendererPort
        from .pricing import FareCalculator
        from .services import MetroQueryService

        config = config or get_config()
        container = cls(config=config)

        def create_repository() -> GraphRepositoryPort:
            if config.graph.source == "csv":
                return CSVGraphRepository(config=config.graph)
            return TimetableGraphRepository(config=config.graph)

        container.register(GraphRepositoryPort, create_repository)
        container.register(PathRendererPort, lambda: TextPathRenderer())
        container.register(
            FareCalculator,
            lambda: FareCalculator(config.fares.to_schedule()),
        )

        def create_query_service() -> MetroQueryService:
            return MetroQueryService(
                graph_repository=container.resolve(GraphRepositoryPort),
                fare_calculator=container.resolve(FareCalculator),
            )

        container.register(MetroQueryService, create_query_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
