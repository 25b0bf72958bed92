"""
Tests for marker based module registration in app/init.go.
"""

import pytest

from basecmd_generator.codegen import setup_jinja_env
from basecmd_generator.constants import Markers
from basecmd_generator.domain.naming import build_naming_convention
from basecmd_generator.exceptions import InitFilePatchError
from basecmd_generator.init_patcher import MarkerInitFilePatcher


@pytest.fixture
def posts(inflector):
    return build_naming_convention("Post", inflector)


@pytest.fixture
def patcher(init_file):
    return MarkerInitFilePatcher(init_file, module_path="base")


def test_insert_places_lines_before_markers(patcher, init_file, posts):
    assert patcher.insert_module(posts) is True

    content = init_file.read_text(encoding="utf-8")
    assert '\t"base/app/posts"\n\t// MODULE_IMPORT_MARKER' in content
    assert '\tmodules["posts"] = posts.Init(deps)\n\t// MODULE_INITIALIZER_MARKER' in content
    assert patcher.is_registered(posts)


def test_insert_keeps_existing_modules(patcher, init_file, posts):
    patcher.insert_module(posts)
    content = init_file.read_text(encoding="utf-8")
    assert '"base/app/categories"' in content
    assert content.index('"base/app/categories"') < content.index('"base/app/posts"')


def test_insert_is_idempotent(patcher, init_file, posts):
    patcher.insert_module(posts)
    once = init_file.read_bytes()

    assert patcher.insert_module(posts) is False
    assert init_file.read_bytes() == once
    assert once.decode("utf-8").count('posts.Init(deps)') == 1


def test_insert_then_remove_restores_file(patcher, init_file, posts):
    original = init_file.read_bytes()

    patcher.insert_module(posts)
    assert patcher.remove_module(posts) is True

    assert init_file.read_bytes() == original


def test_remove_unknown_module_changes_nothing(patcher, init_file, inflector):
    original = init_file.read_bytes()
    assert patcher.remove_module(build_naming_convention("Comment", inflector)) is False
    assert init_file.read_bytes() == original


def test_remove_only_touches_its_own_lines(patcher, init_file, inflector):
    categories = build_naming_convention("Category", inflector)
    assert patcher.remove_module(categories) is True

    content = init_file.read_text(encoding="utf-8")
    assert "categories" not in content
    assert Markers.IMPORT in content
    assert Markers.INITIALIZER in content
    assert '"base/core/module"' in content


def test_remove_with_missing_init_file(tmp_path, posts):
    patcher = MarkerInitFilePatcher(tmp_path / "app" / "init.go")
    assert patcher.remove_module(posts) is False
    assert not (tmp_path / "app" / "init.go").exists()


def test_missing_marker_raises(init_file, posts):
    init_file.write_text(init_file.read_text(encoding="utf-8").replace(Markers.INITIALIZER, "// nothing here"), encoding="utf-8")
    patcher = MarkerInitFilePatcher(init_file)

    with pytest.raises(InitFilePatchError) as exc_info:
        patcher.insert_module(posts)
    assert exc_info.value.context["marker"] == Markers.INITIALIZER
    assert exc_info.value.error_code == "INIT_PATCH_ERROR"


def test_missing_marker_leaves_file_untouched(init_file, posts):
    broken = init_file.read_text(encoding="utf-8").replace(Markers.IMPORT, "")
    init_file.write_text(broken, encoding="utf-8")

    with pytest.raises(InitFilePatchError):
        MarkerInitFilePatcher(init_file).insert_module(posts)
    assert init_file.read_text(encoding="utf-8") == broken


def test_indentation_follows_marker(init_file, posts):
    init_file.write_text(init_file.read_text(encoding="utf-8").replace("\t", "    "), encoding="utf-8")
    MarkerInitFilePatcher(init_file).insert_module(posts)

    content = init_file.read_text(encoding="utf-8")
    assert '    "base/app/posts"\n    // MODULE_IMPORT_MARKER' in content
    assert '    modules["posts"] = posts.Init(deps)\n' in content


def test_crlf_line_endings_are_kept(init_file, posts):
    crlf = init_file.read_text(encoding="utf-8").replace("\n", "\r\n").encode("utf-8")
    init_file.write_bytes(crlf)
    patcher = MarkerInitFilePatcher(init_file)

    patcher.insert_module(posts)
    assert b'\t"base/app/posts"\r\n' in init_file.read_bytes()

    patcher.remove_module(posts)
    assert init_file.read_bytes() == crlf


def test_module_path_is_used_in_import(init_file, posts):
    patcher = MarkerInitFilePatcher(init_file, module_path="github.com/acme/shop")
    patcher.insert_module(posts)
    assert '"github.com/acme/shop/app/posts"' in init_file.read_text(encoding="utf-8")


def test_missing_init_file_is_created_from_template(tmp_path, posts):
    init_path = tmp_path / "app" / "init.go"
    patcher = MarkerInitFilePatcher(init_path, module_path="base", env=setup_jinja_env())

    assert patcher.insert_module(posts) is True

    content = init_path.read_text(encoding="utf-8")
    assert content.startswith("package app")
    assert Markers.IMPORT in content
    assert Markers.INITIALIZER in content
    assert patcher.is_registered(posts)


def test_missing_init_file_without_env_raises(tmp_path, posts):
    patcher = MarkerInitFilePatcher(tmp_path / "app" / "init.go")
    with pytest.raises(InitFilePatchError):
        patcher.insert_module(posts)
