"""
Atomic file writer - ensures no partial writes or corrupted dashboard payloads.
Implements temp-write → fsync → replace pattern for durability.
"""

import os
import json
import time
import tempfile
from pathlib import Path
from typing import Any, Dict


class AtomicWriteError(Exception):
    """Raised when atomic write operations fail."""
    pass


def write_text_atomic(content: str, output_path: Path) -> Dict[str, Any]:
    """
    Write text content atomically to prevent partial files.

    Uses temp-write → fsync → replace so readers see either the old file
    or the complete new one.

    Args:
        content: Text to write
        output_path: Final path for the file

    Returns:
        Dictionary with write results

    Raises:
        AtomicWriteError: If the write or rename fails
    """
    start_time = time.time()
    output_path = Path(output_path)

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory so the rename stays on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            suffix='.tmp',
            prefix=f'{output_path.stem}_',
            dir=output_path.parent
        )
    except OSError as e:
        raise AtomicWriteError(f"Cannot create {output_path}: {e}")
    temp_path = Path(temp_path_str)

    try:
        with os.fdopen(temp_fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, output_path)

    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise AtomicWriteError(f"Atomic write to {output_path} failed: {e}")

    return {
        'status': 'completed',
        'output_path': str(output_path),
        'bytes_written': len(content.encode('utf-8')),
        'duration_seconds': time.time() - start_time
    }


def write_json_atomic(payload: Dict[str, Any], output_path: Path) -> Dict[str, Any]:
    """
    Serialize a payload to JSON and write it atomically.

    NaN and infinity are written as null so browsers can parse the file.

    Args:
        payload: JSON-serialisable dictionary
        output_path: Path for the JSON file

    Returns:
        Dictionary with write results

    Raises:
        AtomicWriteError: If serialization or the write fails
    """
    try:
        # Serialize first to catch errors before touching the filesystem
        json_content = json.dumps(_nan_to_none(payload), indent=2, default=str, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise AtomicWriteError(f"JSON serialization failed: {e}")

    return write_text_atomic(json_content, output_path)


def _nan_to_none(value: Any) -> Any:
    if isinstance(value, float) and (value != value or value in (float('inf'), float('-inf'))):
        return None
    if isinstance(value, dict):
        return {k: _nan_to_none(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_nan_to_none(v) for v in value]
    return value
