"""
Service for slice colors.

- Structured HSLA color value (parsing and serialization)
- Cyclic category palette
- Group/item colors derived from the category color by fading alpha
"""

import colorsys
import logging
import re
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from matplotlib.colors import to_hex, to_rgba

from prioritywheel.core.domain.models import Category

logger = logging.getLogger(__name__)

DEFAULT_PALETTE = (
    "hsl(262, 83%, 58%)",
    "hsl(199, 89%, 48%)",
    "hsl(142, 71%, 45%)",
    "hsl(38, 92%, 50%)",
    "hsl(0, 84%, 60%)",
    "hsl(330, 81%, 60%)",
    "hsl(173, 80%, 40%)",
    "hsl(221, 83%, 53%)",
)

GROUP_ALPHA = 0.7
ITEM_ALPHA = 0.5

_NUMBER = r"\d+(?:\.\d+)?|\.\d+"

_HSL_PATTERN = re.compile(
    rf"^hsla?\(\s*(?P<h>-?(?:{_NUMBER}))(?:deg)?\s*,?\s*"
    rf"(?P<s>{_NUMBER})%\s*,?\s*(?P<l>{_NUMBER})%\s*"
    rf"(?:[,/]\s*(?P<a>{_NUMBER})(?P<ap>%)?\s*)?\)$",
    re.IGNORECASE,
)

_RGB_PATTERN = re.compile(
    rf"^rgba?\(\s*(?P<r>{_NUMBER})\s*,?\s*(?P<g>{_NUMBER})\s*,?\s*(?P<b>{_NUMBER})\s*"
    rf"(?:[,/]\s*(?P<a>{_NUMBER})(?P<ap>%)?\s*)?\)$",
    re.IGNORECASE,
)


class ColorParseError(ValueError):
    """Exception when a color string cannot be parsed."""

    pass


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _format_number(value: float) -> str:
    return f"{round(value, 3):g}"


def _parse_alpha(value: Optional[str], is_percent: bool) -> float:
    if value is None:
        return 1.0
    alpha = float(value)
    if is_percent:
        alpha /= 100.0
    return _clamp(alpha)


@dataclass(frozen=True)
class HslaColor:
    """Color in hue/saturation/lightness/alpha model.

    hue is in degrees [0, 360), saturation, lightness and alpha are fractions [0, 1].
    """

    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "hue", self.hue % 360.0)
        object.__setattr__(self, "saturation", _clamp(self.saturation))
        object.__setattr__(self, "lightness", _clamp(self.lightness))
        object.__setattr__(self, "alpha", _clamp(self.alpha))

    @classmethod
    def from_rgba(cls, rgba: Tuple[float, ...]) -> "HslaColor":
        """Creates color from RGB(A) fractions."""
        r, g, b = rgba[:3]
        alpha = rgba[3] if len(rgba) > 3 else 1.0
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return cls(hue=h * 360.0, saturation=s, lightness=l, alpha=alpha)

    def with_alpha(self, alpha: float) -> "HslaColor":
        """Returns the same hue/saturation/lightness with another alpha."""
        return replace(self, alpha=alpha)

    def to_rgba(self) -> Tuple[float, float, float, float]:
        r, g, b = colorsys.hls_to_rgb(self.hue / 360.0, self.lightness, self.saturation)
        return (r, g, b, self.alpha)

    def to_hex(self, keep_alpha: bool = False) -> str:
        return to_hex(self.to_rgba(), keep_alpha=keep_alpha)

    def to_css(self) -> str:
        """Serializes color as CSS hsla() string."""
        return (
            f"hsla({_format_number(self.hue)}, "
            f"{_format_number(self.saturation * 100)}%, "
            f"{_format_number(self.lightness * 100)}%, "
            f"{_format_number(self.alpha)})"
        )

    def __str__(self) -> str:
        return self.to_css()


def parse_color(text: str) -> HslaColor:
    """
    Parses a color string into HslaColor.

    Supports hsl()/hsla() (comma or space syntax), rgb()/rgba(), hex and named
    colors. Non-HSL models are converted to HSL.

    Args:
        text: Color string

    Returns:
        HslaColor: Parsed color

    Raises:
        ColorParseError: If the string is not a supported color
    """
    if not isinstance(text, str) or not text.strip():
        raise ColorParseError(f"Invalid color: {text!r}")

    value = text.strip()

    match = _HSL_PATTERN.match(value)
    if match:
        return HslaColor(
            hue=float(match.group("h")),
            saturation=float(match.group("s")) / 100.0,
            lightness=float(match.group("l")) / 100.0,
            alpha=_parse_alpha(match.group("a"), bool(match.group("ap"))),
        )

    match = _RGB_PATTERN.match(value)
    if match:
        channels = tuple(
            _clamp(float(match.group(name)) / 255.0) for name in ("r", "g", "b")
        )
        alpha = _parse_alpha(match.group("a"), bool(match.group("ap")))
        return HslaColor.from_rgba(channels + (alpha,))

    try:
        return HslaColor.from_rgba(to_rgba(value))
    except ValueError as e:
        raise ColorParseError(f"Invalid color: {text!r}") from e


class ColorService:
    """Service for resolving slice colors."""

    def __init__(
        self,
        palette: Optional[Sequence[str]] = None,
        group_alpha: float = GROUP_ALPHA,
        item_alpha: float = ITEM_ALPHA,
    ):
        palette = list(palette) if palette else list(DEFAULT_PALETTE)
        self._palette = [parse_color(color) for color in palette]

        for name, alpha in (("group_alpha", group_alpha), ("item_alpha", item_alpha)):
            if not 0.0 < alpha <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {alpha}")

        self.group_alpha = group_alpha
        self.item_alpha = item_alpha

    @property
    def palette_size(self) -> int:
        return len(self._palette)

    def palette_color(self, index: int) -> HslaColor:
        """Returns palette color for the category position (cyclic)."""
        return self._palette[index % len(self._palette)]

    def category_color(self, category: Category, index: int) -> HslaColor:
        """
        Returns base color of a category.

        An explicit color wins over the palette. An explicit color that cannot
        be parsed is logged and replaced by the palette color.
        """
        if category.color:
            try:
                return parse_color(category.color)
            except ColorParseError as e:
                logger.warning(
                    f"Category '{category.id}' has invalid color, using palette: {e}"
                )

        return self.palette_color(index)

    def group_color(self, category_color: HslaColor) -> HslaColor:
        """Derives group color from its category color."""
        return category_color.with_alpha(category_color.alpha * self.group_alpha)

    def item_color(self, group_color: HslaColor) -> HslaColor:
        """Derives item color from its group color."""
        return group_color.with_alpha(
            group_color.alpha * self.item_alpha / self.group_alpha
        )
