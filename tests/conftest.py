"""Shared test fixtures and configuration."""

import os
import sys
from pathlib import Path

# Add xml_validator/ to Python path so `from xmlvalidator.xxx` imports work
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "xml_validator"))

import pytest

from xmlvalidator.validator.urn_resolver import UrnResolver

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

COMPONENTS = {
    "acme:framework": "vendor/acme/framework",
    "acme:broken": "broken",
}
MODULES = {"Acme_Catalog": "app/code/Acme/Catalog"}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host CI environment from switching reporters or settings."""
    for name in list(os.environ):
        if name.startswith("XMLVALIDATOR_"):
            monkeypatch.delenv(name, raising=False)
    for name in ("GITHUB_ACTIONS", "FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def urn_resolver(fixtures_dir: Path) -> UrnResolver:
    return UrnResolver(fixtures_dir, COMPONENTS, MODULES)


@pytest.fixture
def config_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / ".xmlvalidator.yaml"


@pytest.fixture
def resolver_tables() -> tuple[dict[str, str], dict[str, str]]:
    return dict(COMPONENTS), dict(MODULES)
