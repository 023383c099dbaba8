"""
Writing build results to disk.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .builder import SERVICE_COMPONENT, BuildResult

logger = logging.getLogger(__name__)

HEADER_FILE = f"{SERVICE_COMPONENT}.header"


def write_resources(result: BuildResult, output_dir: Path) -> list[Path]:
    """
    Write generated descriptors and the rewritten header.

    Args:
        result: Build result
        output_dir: Directory the resource paths are relative to

    Returns:
        Paths of the files written
    """
    written: list[Path] = []
    for resource, content in result.resources.items():
        path = output_dir / resource
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        written.append(path)

    if result.header:
        header_path = output_dir / HEADER_FILE
        header_path.parent.mkdir(parents=True, exist_ok=True)
        header_path.write_text(result.header + "\n", encoding="utf-8")
        written.append(header_path)

    logger.debug("Wrote %d file(s) to %s", len(written), output_dir)
    return written
