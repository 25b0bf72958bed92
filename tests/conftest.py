# File: tests/conftest.py
# Shared fixtures: an inflector and a throwaway Go project with an init file.

from pathlib import Path

import pytest

from basecmd_generator.config_validation import ToolConfigSchema
from basecmd_generator.domain.naming import Inflector


INIT_GO_CONTENT = """package app

import (
\t"base/core/module"
\t"base/app/categories"
\t// MODULE_IMPORT_MARKER
)

// AppModules implements module.AppModuleProvider interface
type AppModules struct{}

func (am *AppModules) GetAppModules(deps module.Dependencies) map[string]module.Module {
\tmodules := make(map[string]module.Module)

\tmodules["categories"] = categories.Init(deps)
\t// MODULE_INITIALIZER_MARKER

\treturn modules
}
"""


@pytest.fixture(scope="session")
def inflector() -> Inflector:
    """One inflector for the whole session, as the CLI does."""
    return Inflector()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A minimal Go project with app/init.go carrying both marker comments."""
    app_dir = tmp_path / "app"
    app_dir.mkdir()
    (app_dir / "init.go").write_text(INIT_GO_CONTENT, encoding="utf-8")
    (tmp_path / "go.mod").write_text("module base\n\ngo 1.22\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def init_file(project_root: Path) -> Path:
    return project_root / "app" / "init.go"


@pytest.fixture
def config(project_root: Path) -> ToolConfigSchema:
    return ToolConfigSchema(project_root=str(project_root), format_code=False)
