"""
Artifact reader - loads dashboard JSON artifacts from local files.
Thin IO layer; everything past json.load is handed to the normalizers.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from analysis.models import ForwardReturnSummary, HoldingsSnapshot, RankMatrix, ReturnSeries
from ingestion.transforms.normalizers import (
    normalize_global_wave,
    normalize_holdings,
    normalize_manifest,
    normalize_rank_matrix,
    normalize_return_series,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ArtifactError(Exception):
    """Raised when an artifact file cannot be read or parsed."""
    pass


def load_json_artifact(path: PathLike) -> Any:
    """
    Read and parse one JSON artifact.

    Args:
        path: Path to the JSON file

    Returns:
        Parsed JSON value

    Raises:
        ArtifactError: If the file is missing, unreadable or not valid JSON
    """
    artifact_path = Path(path)
    if not artifact_path.exists():
        raise ArtifactError(f"Artifact not found: {artifact_path}")

    try:
        with open(artifact_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ArtifactError(f"Failed to read artifact {artifact_path}: {e}")

    logger.debug(f"Loaded artifact {artifact_path}")
    return data


def artifact_id(path: PathLike) -> str:
    """Caller-side identifier of an artifact: its file stem."""
    return Path(path).stem


def read_return_series(path: PathLike, fallback_label: Optional[str] = None) -> ReturnSeries:
    """Load a returns artifact; the file stem is the fallback label."""
    return normalize_return_series(load_json_artifact(path), fallback_label or artifact_id(path))


def read_global_wave(path: PathLike, fallback_label: Optional[str] = None) -> ForwardReturnSummary:
    """Load a global-wave artifact; the file stem is the fallback label."""
    return normalize_global_wave(load_json_artifact(path), fallback_label or artifact_id(path))


def read_rank_matrix(path: PathLike) -> RankMatrix:
    return normalize_rank_matrix(load_json_artifact(path))


def read_manifest(path: PathLike) -> list:
    return normalize_manifest(load_json_artifact(path))


def read_holdings(path: PathLike, fallback_label: Optional[str] = None) -> HoldingsSnapshot:
    return normalize_holdings(load_json_artifact(path), fallback_label or artifact_id(path))
