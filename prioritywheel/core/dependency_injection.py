"""
Simple DI container for dependency management.

Provides centralized service registration and resolution
for dependency injection pattern implementation.
"""

import logging
from typing import Any, Callable, Dict, Optional, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DIContainer:
    """Simple container for Dependency Injection."""

    def __init__(self):
        self._singletons: Dict[Type, Any] = {}
        self._factories: Dict[Type, Callable[[], Any]] = {}
        self._transients: Dict[Type, Callable[[], Any]] = {}

    def register_singleton(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Registers service as singleton."""
        self._singletons.pop(interface, None)
        self._factories[interface] = factory

    def register_transient(self, interface: Type[T], factory: Callable[[], T]) -> None:
        """Registers service as transient (new instance each time)."""
        self._transients[interface] = factory

    def get(self, interface: Type[T]) -> T:
        """Gets service instance."""

        if interface in self._singletons:
            return self._singletons[interface]

        if interface in self._factories:
            instance = self._factories[interface]()
            self._singletons[interface] = instance
            return instance

        if interface in self._transients:
            return self._transients[interface]()

        raise ValueError(f"Service {interface.__name__} not registered")

    def clear(self) -> None:
        """Clears all registered services."""
        self._singletons.clear()
        self._factories.clear()
        self._transients.clear()


_container = DIContainer()


def get_container() -> DIContainer:
    """Returns global DI container."""
    return _container


def setup_container(config: Optional[Dict[str, Any]] = None) -> DIContainer:
    """
    Sets up DI container with the wheel services.

    Args:
        config: Configuration dictionary (see cli.config_loader); defaults if None
    """
    from prioritywheel.core.application.color_service import (
        GROUP_ALPHA,
        ITEM_ALPHA,
        ColorService,
    )
    from prioritywheel.core.application.details_service import DetailsService
    from prioritywheel.core.application.interaction_service import InteractionController
    from prioritywheel.core.application.layout_service import (
        MIN_ANGLE_FOR_TEXT,
        LayoutService,
        RingBands,
    )
    from prioritywheel.core.application.path_service import PathService
    from prioritywheel.core.application.tree_service import TreeService

    config = config or {}

    container = get_container()
    container.clear()

    container.register_singleton(TreeService, lambda: TreeService())
    container.register_singleton(PathService, lambda: PathService())
    container.register_singleton(DetailsService, lambda: DetailsService())
    container.register_singleton(
        ColorService,
        lambda: ColorService(
            palette=config.get("palette"),
            group_alpha=config.get("group_alpha", GROUP_ALPHA),
            item_alpha=config.get("item_alpha", ITEM_ALPHA),
        ),
    )
    container.register_singleton(
        LayoutService,
        lambda: LayoutService(
            color_service=container.get(ColorService),
            path_service=container.get(PathService),
            bands=RingBands(**config["rings"]) if config.get("rings") else None,
            label_min_angle=config.get("label_min_angle", MIN_ANGLE_FOR_TEXT),
        ),
    )
    container.register_transient(
        InteractionController,
        lambda: InteractionController(container.get(LayoutService)),
    )

    logger.debug("DI container configured")
    return container
