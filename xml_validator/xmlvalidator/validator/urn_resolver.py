"""Schema URN resolution against registered component and module roots."""

from __future__ import annotations

import logging
import re
from pathlib import Path, PurePosixPath

from lxml import etree

from xmlvalidator.validator.errors import ResolutionError

logger = logging.getLogger(__name__)

# urn:<vendor>:<component>:<path> or urn:<vendor>:module:<Module_Name>:<path>
URN_RE = re.compile(r"^urn:(?P<vendor>[A-Za-z0-9_.-]+):(?P<component>[A-Za-z0-9_.-]+):(?P<rest>.+)$")
MODULE_RE = re.compile(r"^(?P<module>[A-Za-z0-9]+_[A-Za-z0-9_]+):(?P<path>.+)$")


class UrnResolver:
    """Maps schema URNs to files below a fixed project root.

    ``components`` is keyed by ``"<vendor>:<component>"`` and ``modules`` by module
    name; both map to directories that are taken relative to ``project_root``
    unless absolute.
    """

    def __init__(
        self,
        project_root: Path,
        components: dict[str, str | Path] | None = None,
        modules: dict[str, str | Path] | None = None,
    ) -> None:
        self._project_root = project_root.resolve()
        self._components = {
            key.lower(): self._root_path(value) for key, value in (components or {}).items()
        }
        self._modules = {key: self._root_path(value) for key, value in (modules or {}).items()}
        self._cache: dict[str, Path] = {}

    @property
    def project_root(self) -> Path:
        return self._project_root

    def _root_path(self, value: str | Path) -> Path:
        path = Path(value)
        if not path.is_absolute():
            path = self._project_root / path
        return path.resolve()

    def resolve(self, identifier: str) -> Path:
        """Return the schema file an identifier points to.

        Raises ResolutionError for malformed URNs, unregistered components or
        modules, paths escaping their root, and missing files.
        """
        cached = self._cache.get(identifier)
        if cached is not None:
            return cached

        base, relative = self._split(identifier)
        rel_path = PurePosixPath(relative)
        if rel_path.is_absolute() or ".." in rel_path.parts:
            raise ResolutionError(identifier, "schema path must stay inside its root")

        candidate = (base / Path(*rel_path.parts)).resolve()
        if not candidate.is_file():
            raise ResolutionError(identifier, f"file {self.display_path(candidate)} does not exist")

        logger.debug("Resolved %s -> %s", identifier, candidate)
        self._cache[identifier] = candidate
        return candidate

    def _split(self, identifier: str) -> tuple[Path, str]:
        match = URN_RE.match(identifier.strip())
        if not match:
            raise ResolutionError(identifier, "not a schema URN")

        vendor = match.group("vendor").lower()
        component = match.group("component").lower()
        rest = match.group("rest")

        if component == "module":
            module_match = MODULE_RE.match(rest)
            if not module_match:
                raise ResolutionError(identifier, "module URNs need '<Module_Name>:<path>'")
            module = module_match.group("module")
            if module not in self._modules:
                raise ResolutionError(identifier, f"module {module} is not registered")
            return self._modules[module], module_match.group("path")

        key = f"{vendor}:{component}"
        if key not in self._components:
            raise ResolutionError(identifier, f"component {key} is not registered")
        return self._components[key], rest

    def display_path(self, path: Path) -> str:
        """Path relative to the project root with forward slashes."""
        try:
            return path.resolve().relative_to(self._project_root).as_posix()
        except ValueError:
            return path.resolve().as_posix()


class UrnSchemaResolver(etree.Resolver):
    """Lets XSD files include or import other schemas by URN."""

    def __init__(self, urn_resolver: UrnResolver) -> None:
        super().__init__()
        self._urn_resolver = urn_resolver

    def resolve(self, url, pubid, context):
        if not url or not url.startswith("urn:"):
            return None
        try:
            path = self._urn_resolver.resolve(url)
        except ResolutionError as e:
            logger.debug("Schema include not resolved: %s", e)
            return None
        return self.resolve_filename(str(path), context)
