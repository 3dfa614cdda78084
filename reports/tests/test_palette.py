"""
Tests for categorical palette utilities.
"""

from reports.palette import (
    DEFAULT_CATEGORY_COLOR,
    CategoryPalette,
    make_discrete_colorscale,
    category_colorscale
)


class TestCategoryPalette:
    """Tests for CategoryPalette lookups."""

    def test_known_category(self):
        palette = CategoryPalette(colors={'Top300': '#1f77b4'})

        assert palette.color_for('Top300') == '#1f77b4'

    def test_unknown_category_uses_default(self):
        palette = CategoryPalette(colors={'Top300': '#1f77b4'})

        assert palette.color_for('Momentum_01') == DEFAULT_CATEGORY_COLOR
        assert DEFAULT_CATEGORY_COLOR == '#d1d5db'

    def test_custom_default(self):
        palette = CategoryPalette(default='#000000')

        assert palette.color_for('anything') == '#000000'

    def test_colors_for_keeps_order(self):
        palette = CategoryPalette(colors={'A': '#f00', 'B': '#0f0'})

        assert palette.colors_for(['B', 'C', 'A']) == ['#0f0', DEFAULT_CATEGORY_COLOR, '#f00']


class TestDiscreteColorscale:
    """Tests for make_discrete_colorscale and category_colorscale."""

    def test_two_colors(self):
        assert make_discrete_colorscale(['#f00', '#0f0']) == [
            (0.0, '#f00'), (0.5, '#f00'),
            (0.5, '#0f0'), (1.0, '#0f0'),
        ]

    def test_single_color_spans_domain(self):
        assert make_discrete_colorscale(['#f00']) == [(0.0, '#f00'), (1.0, '#f00')]

    def test_empty(self):
        assert make_discrete_colorscale([]) == []

    def test_stops_are_non_decreasing(self):
        scale = make_discrete_colorscale(['#a', '#b', '#c', '#d', '#e', '#f', '#g'])
        stops = [stop for stop, _ in scale]

        assert len(scale) == 14
        assert stops == sorted(stops)
        assert stops[0] == 0.0
        assert stops[-1] == 1.0

    def test_category_colorscale(self):
        palette = CategoryPalette(colors={'A': '#f00'})

        scale = category_colorscale(['A', 'B'], palette)

        assert scale == [(0.0, '#f00'), (0.5, '#f00'), (0.5, DEFAULT_CATEGORY_COLOR), (1.0, DEFAULT_CATEGORY_COLOR)]
