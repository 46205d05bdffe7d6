import logging
from typing import Any, Dict, List, Optional

from PyQt6.QtCore import QSettings

from prioritywheel.core.application.color_service import GROUP_ALPHA, ITEM_ALPHA
from prioritywheel.core.application.layout_service import MIN_ANGLE_FOR_TEXT, RingBands

logger = logging.getLogger(__name__)

RING_KEYS = ("category_outer", "group_inner", "group_outer", "item_inner", "item_outer")


class SettingsManager:
    def __init__(
        self,
        organization_name: str,
        application_name: str,
        file_path: Optional[str] = None,
    ):
        if file_path:
            self.settings = QSettings(file_path, QSettings.Format.IniFormat)
        else:
            self.settings = QSettings(organization_name, application_name)

    def load_debug_mode(self) -> bool:
        """Loads permanent debug mode setting."""
        return self.settings.value("debug/enabled", False, type=bool)

    def save_debug_mode(self, enabled: bool):
        """Saves permanent debug mode setting."""
        self.settings.setValue("debug/enabled", enabled)
        self.settings.sync()

    def load_ring_bands(self) -> RingBands:
        """
        Loads ring radii. Falls back to defaults if the stored radii are not
        strictly increasing.
        """
        defaults = RingBands()
        radii = {
            key: self.settings.value(f"rings/{key}", getattr(defaults, key), type=float)
            for key in RING_KEYS
        }

        try:
            return RingBands(**radii)
        except ValueError as e:
            logger.warning(f"Stored ring radii are invalid, using defaults: {e}")
            return defaults

    def save_ring_bands(self, bands: RingBands):
        for key in RING_KEYS:
            self.settings.setValue(f"rings/{key}", getattr(bands, key))
        self.settings.sync()

    def load_palette(self) -> List[str]:
        """Loads custom palette; empty list means the built-in palette."""
        palette = []
        size = self.settings.beginReadArray("palette")
        for index in range(size):
            self.settings.setArrayIndex(index)
            palette.append(self.settings.value("color", "", type=str))
        self.settings.endArray()
        return [color for color in palette if color]

    def save_palette(self, palette: List[str]):
        self.settings.remove("palette")
        self.settings.beginWriteArray("palette", len(palette))
        for index, color in enumerate(palette):
            self.settings.setArrayIndex(index)
            self.settings.setValue("color", color)
        self.settings.endArray()
        self.settings.sync()

    def load_wheel_settings(self) -> dict:
        return {
            "label_min_angle": self.settings.value(
                "wheel/label_min_angle", MIN_ANGLE_FOR_TEXT, type=float
            ),
            "group_alpha": self.settings.value("wheel/group_alpha", GROUP_ALPHA, type=float),
            "item_alpha": self.settings.value("wheel/item_alpha", ITEM_ALPHA, type=float),
        }

    def save_wheel_settings(self, config: dict):
        self.settings.setValue(
            "wheel/label_min_angle", config.get("label_min_angle", MIN_ANGLE_FOR_TEXT)
        )
        self.settings.setValue("wheel/group_alpha", config.get("group_alpha", GROUP_ALPHA))
        self.settings.setValue("wheel/item_alpha", config.get("item_alpha", ITEM_ALPHA))
        self.settings.sync()

    def load_layout_config(self) -> Dict[str, Any]:
        """Returns configuration in the shape accepted by setup_container()."""
        bands = self.load_ring_bands()
        config = self.load_wheel_settings()
        config["rings"] = {key: getattr(bands, key) for key in RING_KEYS}
        palette = self.load_palette()
        if palette:
            config["palette"] = palette
        return config
