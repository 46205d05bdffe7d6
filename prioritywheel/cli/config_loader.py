"""
Configuration loader for CLI.

Handles loading and merging of configuration files with CLI arguments.
"""

import json
import os
from typing import Any, Dict, List, Optional, Tuple

from prioritywheel.core.application.color_service import (
    DEFAULT_PALETTE,
    GROUP_ALPHA,
    ITEM_ALPHA,
    ColorParseError,
    parse_color,
)
from prioritywheel.core.application.layout_service import (
    DEFAULT_CANVAS_SIZE,
    MIN_ANGLE_FOR_TEXT,
    RingBands,
)
from prioritywheel.core.settings import RING_KEYS


class ConfigLoader:
    """Loads and merges configuration from files and CLI arguments."""

    def load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from JSON file.

        Args:
            config_path: Path to configuration file

        Returns:
            Dict[str, Any]: Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid JSON or not an object
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file: {e}")

        if not isinstance(config, dict):
            raise ValueError("Configuration file must contain a JSON object")

        return config

    def merge_configs(
        self, base_config: Dict[str, Any], override_config: Dict[str, Any]
    ) -> Dict[str, Any]:
        """
        Merge two configuration dictionaries.

        The nested "rings" table is merged key by key so a file may override
        a single radius.
        """
        merged = base_config.copy()
        for key, value in override_config.items():
            if key == "rings" and isinstance(value, dict) and isinstance(merged.get(key), dict):
                rings = dict(merged[key])
                rings.update(value)
                merged[key] = rings
            else:
                merged[key] = value
        return merged

    def args_to_config(self, args) -> Dict[str, Any]:
        """
        Convert CLI arguments to configuration dictionary.

        Args:
            args: Parsed CLI arguments

        Returns:
            Dict[str, Any]: Configuration dictionary
        """
        config = {}

        numeric_fields = {
            "width": "canvas_width",
            "height": "canvas_height",
            "label_min_angle": "label_min_angle",
        }

        for arg_name, config_key in numeric_fields.items():
            value = getattr(args, arg_name, None)
            if value is not None:
                config[config_key] = value

        return config

    def get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        bands = RingBands()
        return {
            "canvas_width": DEFAULT_CANVAS_SIZE,
            "canvas_height": DEFAULT_CANVAS_SIZE,
            "rings": {key: getattr(bands, key) for key in RING_KEYS},
            "palette": list(DEFAULT_PALETTE),
            "group_alpha": GROUP_ALPHA,
            "item_alpha": ITEM_ALPHA,
            "label_min_angle": MIN_ANGLE_FOR_TEXT,
        }

    def load_and_merge_config(self, config_path: Optional[str], cli_args) -> Dict[str, Any]:
        """
        Load configuration file and merge with CLI arguments.

        Args:
            config_path: Path to configuration file (optional)
            cli_args: Parsed CLI arguments

        Returns:
            Dict[str, Any]: Final merged configuration

        Raises:
            ValueError: If the config file cannot be loaded
        """
        final_config = self.get_default_config()

        if config_path:
            try:
                file_config = self.load_config_file(config_path)
            except (OSError, ValueError) as e:
                raise ValueError(f"Failed to load config file: {e}")
            final_config = self.merge_configs(final_config, file_config)

        cli_config = self.args_to_config(cli_args)
        return self.merge_configs(final_config, cli_config)

    def load_validated_config(
        self, config_path: Optional[str], cli_args
    ) -> Tuple[Optional[Dict[str, Any]], List[str]]:
        """
        Load, merge and validate configuration in one step.

        Args:
            config_path: Path to configuration file (optional)
            cli_args: Parsed CLI arguments

        Returns:
            Tuple of the final configuration (None if unusable) and its issues
        """
        try:
            config = self.load_and_merge_config(config_path, cli_args)
        except ValueError as e:
            return None, [str(e)]

        issues = self.validate_config(config)
        if issues:
            return None, issues

        return config, []

    def validate_config(self, config: Dict[str, Any]) -> List[str]:
        """
        Validate configuration dictionary.

        Args:
            config: Configuration to validate

        Returns:
            List[str]: List of validation issues (empty if valid)
        """
        issues = []

        for field in ("canvas_width", "canvas_height"):
            value = config.get(field)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                issues.append(f"Field {field} must be a positive number")

        rings = config.get("rings")
        if not isinstance(rings, dict):
            issues.append("Field rings must be an object")
        else:
            unknown = set(rings) - set(RING_KEYS)
            if unknown:
                issues.append(f"Unknown ring keys: {', '.join(sorted(unknown))}")
            missing = [key for key in RING_KEYS if key not in rings]
            if missing:
                issues.append(f"Missing ring keys: {', '.join(missing)}")
            elif not unknown:
                try:
                    RingBands(**{key: float(rings[key]) for key in RING_KEYS})
                except (TypeError, ValueError) as e:
                    issues.append(f"Invalid rings: {e}")

        for field in ("group_alpha", "item_alpha"):
            value = config.get(field)
            if not isinstance(value, (int, float)) or not 0 < value <= 1:
                issues.append(f"Field {field} must be in (0, 1]")

        label_min_angle = config.get("label_min_angle")
        if not isinstance(label_min_angle, (int, float)) or label_min_angle < 0:
            issues.append("Field label_min_angle must be a non-negative number")

        palette = config.get("palette")
        if not isinstance(palette, list) or not palette:
            issues.append("Field palette must be a non-empty list of colors")
        else:
            for color in palette:
                try:
                    parse_color(color)
                except ColorParseError as e:
                    issues.append(f"Invalid palette color: {e}")

        return issues
