"""File discovery — expand CLI paths into validation requests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from xmlvalidator.validator.models import ExcludedFile, ValidationRequest

logger = logging.getLogger(__name__)

# Tool configuration files that are XML but carry no schema declaration
EXCLUDED_FILES = (
    ".phpcs.xml",
    "phpcs.xml",
    "phpunit.xml",
)


def display_name(path: Path, project_root: Path) -> str:
    """Path relative to the project root with forward slashes."""
    resolved = path.resolve()
    try:
        return resolved.relative_to(project_root.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def discover_files(
    paths: Iterable[str | Path],
    project_root: Path,
    excluded: Iterable[str] = EXCLUDED_FILES,
) -> Iterator[ValidationRequest | ExcludedFile]:
    """Yield one entry per XML file found under the given paths.

    Files are yielded as given; directories are searched recursively for
    ``*.xml`` in sorted order. Excluded basenames found in directories are
    skipped silently; an excluded file named directly yields an ExcludedFile.
    Paths that do not exist are yielded as requests so the read fails inside
    the batch runner.
    """
    excluded_names = set(excluded)

    for raw in paths:
        path = Path(raw)

        if path.is_dir():
            found = sorted(
                p for p in path.rglob("*.xml")
                if p.is_file() and p.name not in excluded_names
            )
            logger.debug("Found %d XML files in %s", len(found), path)
            for xml_file in found:
                yield ValidationRequest(
                    display_name=display_name(xml_file, project_root), path=xml_file,
                )
            continue

        if path.name in excluded_names:
            yield ExcludedFile(display_name=path.name)
            continue

        yield ValidationRequest(display_name=display_name(path, project_root), path=path)
