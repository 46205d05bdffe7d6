"""Tests for service wiring."""

import pytest

from prioritywheel.core.application.color_service import ColorService
from prioritywheel.core.application.interaction_service import InteractionController
from prioritywheel.core.application.layout_service import LayoutService, RingBands
from prioritywheel.core.dependency_injection import DIContainer, setup_container


class TestDIContainer:
    def test_singleton_and_transient(self):
        container = DIContainer()
        container.register_singleton(list, lambda: [])
        container.register_transient(dict, lambda: {})

        assert container.get(list) is container.get(list)
        assert container.get(dict) is not container.get(dict)

    def test_unregistered_service(self):
        with pytest.raises(ValueError, match="not registered"):
            DIContainer().get(set)


class TestSetupContainer:
    def test_defaults(self):
        container = setup_container()
        layout_service = container.get(LayoutService)

        assert layout_service.bands == RingBands()
        assert container.get(InteractionController) is not container.get(InteractionController)

    def test_config_is_applied(self):
        container = setup_container(
            {
                "rings": {
                    "category_outer": 50,
                    "group_inner": 60,
                    "group_outer": 100,
                    "item_inner": 110,
                    "item_outer": 150,
                },
                "palette": ["#ff0000"],
                "group_alpha": 0.6,
                "label_min_angle": 30,
            }
        )

        layout_service = container.get(LayoutService)
        color_service = container.get(ColorService)

        assert layout_service.bands.item_outer == 150
        assert layout_service.label_min_angle == 30
        assert color_service.palette_size == 1
        assert color_service.group_alpha == 0.6
