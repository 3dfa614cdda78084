"""
Rank heatmap encoding.
Turns a month-by-rank grid of category labels into integer codes plus a
stepped colour scale so a continuous heatmap renders one flat colour per
category.
"""

from typing import Dict, List, Optional

from analysis.models import RankHeatmap, RankMatrix
from reports.formatters import format_percentage
from reports.palette import CategoryPalette, category_colorscale

UNKNOWN_CODE = -1
MISSING_VALUE_TEXT = "NA"


def category_universe(matrix: RankMatrix) -> List[str]:
    """
    Stable category list for code assignment.

    Uses the matrix's declared categories when present, otherwise every
    label in order of first appearance.
    """
    if matrix.categories:
        return list(matrix.categories)

    seen = []
    for month_labels in matrix.ranked_labels:
        for label in month_labels:
            if label and label not in seen:
                seen.append(label)
    return seen


def _cell_text(label: str, value: Optional[float]) -> str:
    pct = format_percentage(value, decimal_places=2, missing=MISSING_VALUE_TEXT)
    return f"{label}<br>{pct}"


def encode_rank_heatmap(matrix: RankMatrix, palette: CategoryPalette) -> RankHeatmap:
    """
    Encode a rank matrix as an integer heatmap.

    Row r holds the categories ranked r + 1 in each month; z holds each
    label's index in the category list, or -1 for labels outside it.
    The y axis is reversed so rank 1 is drawn at the top.

    Args:
        matrix: Ranked labels and values per month
        palette: Category colours (unknown categories get the neutral default)

    Returns:
        RankHeatmap with codes, hover text and a discrete colour scale

    Example:
        categories ["A", "B"], one month ranked ["B", "A"]:
        z = [[1], [0]]
    """
    categories = category_universe(matrix)
    codes: Dict[str, int] = {c: i for i, c in enumerate(categories)}

    n_months = len(matrix.months)
    n_ranks = len(matrix.ranked_labels[0]) if matrix.ranked_labels else 0

    z = []
    text = []
    for rank in range(n_ranks):
        z_row = []
        text_row = []
        for col in range(n_months):
            labels = matrix.ranked_labels[col] if col < len(matrix.ranked_labels) else ()
            values = matrix.ranked_values[col] if col < len(matrix.ranked_values) else ()
            label = labels[rank] if rank < len(labels) else ""
            value = values[rank] if rank < len(values) else None

            z_row.append(codes.get(label, UNKNOWN_CODE))
            text_row.append(_cell_text(label, value))
        z.append(tuple(z_row))
        text.append(tuple(text_row))

    return RankHeatmap(
        months=tuple(matrix.months),
        ranks=tuple(range(1, n_ranks + 1)),
        categories=tuple(categories),
        z=tuple(z),
        text=tuple(text),
        colorscale=tuple(category_colorscale(categories, palette)),
        zmin=0,
        zmax=len(categories) - 1,
        reverse_y=True
    )


def decode_cell(heatmap: RankHeatmap, rank_index: int, month_index: int) -> Optional[str]:
    """Map a heatmap code back to its category label (None for unknown)."""
    code = heatmap.z[rank_index][month_index]
    if code == UNKNOWN_CODE or not 0 <= code < len(heatmap.categories):
        return None
    return heatmap.categories[code]


def decode_matrix(heatmap: RankHeatmap) -> List[List[Optional[str]]]:
    """Decode every cell, rank-major."""
    return [
        [decode_cell(heatmap, r, c) for c in range(len(heatmap.months))]
        for r in range(len(heatmap.ranks))
    ]
