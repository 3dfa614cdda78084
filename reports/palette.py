"""
Categorical palette utilities.
Fixed colour per category, and discrete colour scales that stop a
continuous renderer from blending colours of unrelated categories.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Sequence, Tuple

DEFAULT_CATEGORY_COLOR = "#d1d5db"


@dataclass(frozen=True)
class CategoryPalette:
    """Explicit category -> colour table with a neutral fallback."""
    colors: Mapping[str, str] = field(default_factory=dict)
    default: str = DEFAULT_CATEGORY_COLOR

    def color_for(self, category: str) -> str:
        return self.colors.get(category, self.default)

    def colors_for(self, categories: Sequence[str]) -> List[str]:
        return [self.color_for(c) for c in categories]


def make_discrete_colorscale(colors: Sequence[str]) -> List[Tuple[float, str]]:
    """
    Build a stepped colour scale over [0, 1].

    For k colours the domain is cut into k equal bands and each band gets
    two stops (its start and its end) with the same colour, so values
    inside a band never interpolate towards a neighbour.

    Args:
        colors: One colour per category, in code order

    Returns:
        List of (stop, colour) pairs, 2 × len(colors) long

    Example:
        ["#f00", "#0f0"] -> [(0.0, "#f00"), (0.5, "#f00"), (0.5, "#0f0"), (1.0, "#0f0")]
    """
    n = len(colors)
    scale = []
    for i, color in enumerate(colors):
        scale.append((i / n, color))
        scale.append(((i + 1) / n, color))
    return scale


def category_colorscale(
    categories: Sequence[str],
    palette: CategoryPalette
) -> List[Tuple[float, str]]:
    """Discrete colour scale for a category list under a palette."""
    return make_discrete_colorscale(palette.colors_for(categories))
