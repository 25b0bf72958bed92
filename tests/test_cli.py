"""
End-to-end tests for the basegen command line.
"""

import logging
from unittest.mock import patch

import pytest

from basecmd_generator import cli


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def run(project_root, *argv):
    cli.main(["--no-color", "--root", str(project_root), *argv])


def test_generate_creates_module(project_root, init_file):
    run(project_root, "generate", "Post", "title:string", "published:bool", "author_id:uint", "--no-format")

    assert (project_root / "app" / "models" / "post.go").is_file()
    assert (project_root / "app" / "posts" / "controller.go").is_file()
    assert 'modules["posts"] = posts.Init(deps)' in init_file.read_text(encoding="utf-8")


def test_generate_alias_and_validator_flag(project_root):
    run(project_root, "g", "Tag", "label", "--validator", "--no-format")
    assert (project_root / "app" / "tags" / "validator.go").is_file()


def test_dry_run_prints_without_writing(project_root, init_file, capsys):
    original = init_file.read_bytes()

    run(project_root, "generate", "Post", "title", "--dry-run")

    out = capsys.readouterr().out
    assert "type Post struct {" in out
    assert 'router.GET("/posts", c.List)' in out
    assert not (project_root / "app" / "posts").exists()
    assert init_file.read_bytes() == original


def test_destroy_with_yes(project_root, init_file):
    original = init_file.read_bytes()
    run(project_root, "generate", "Post", "title", "--no-format")

    run(project_root, "destroy", "Post", "-y")

    assert not (project_root / "app" / "posts").exists()
    assert init_file.read_bytes() == original


def test_destroy_asks_for_confirmation(project_root):
    run(project_root, "generate", "Post", "title", "--no-format")

    with patch("builtins.input", return_value="n") as mock_input:
        run(project_root, "d", "Post")

    mock_input.assert_called_once()
    assert (project_root / "app" / "posts").is_dir()

    with patch("builtins.input", return_value=""):
        run(project_root, "d", "Post")
    assert not (project_root / "app" / "posts").exists()


def test_destroy_skips_missing_names(project_root, capsys):
    run(project_root, "generate", "Post", "title", "--no-format")
    run(project_root, "destroy", "Post", "Comment", "--yes")

    assert "No module found for 'Comment'" in capsys.readouterr().err
    assert not (project_root / "app" / "posts").exists()


def test_destroy_nothing_exits_with_error(project_root):
    with pytest.raises(SystemExit) as exc_info:
        run(project_root, "destroy", "Comment", "-y")
    assert exc_info.value.code == 1


def test_invalid_input_exits_with_error(project_root):
    with pytest.raises(SystemExit) as exc_info:
        run(project_root, "generate", "Post", ":string", "--no-format")
    assert exc_info.value.code == 1
    assert not (project_root / "app" / "models").exists()


def test_missing_subcommand_is_a_usage_error(project_root):
    with pytest.raises(SystemExit) as exc_info:
        run(project_root)
    assert exc_info.value.code == 2


def test_module_path_option(project_root, init_file):
    run(project_root, "--module-path", "github.com/acme/shop", "generate", "Post", "title", "--no-format")
    assert '"github.com/acme/shop/app/posts"' in init_file.read_text(encoding="utf-8")


class TestConfirm:
    def test_default_is_yes(self):
        with patch("builtins.input", return_value="  "):
            assert cli.confirm("Remove?") is True

    def test_no(self):
        with patch("builtins.input", return_value="no"):
            assert cli.confirm("Remove?") is False

    def test_end_of_input_is_no(self):
        with patch("builtins.input", side_effect=EOFError):
            assert cli.confirm("Remove?") is False
