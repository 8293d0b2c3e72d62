"""
CLI tests: pathindex find / index / roots.
"""
import json
import os

import pytest
import yaml

from pathindex.cli import main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every CLI test from an empty directory with no pathindex env vars."""
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for var in ("PATHINDEX_PATH", "PATHINDEX_STRICT", "PATHINDEX_VERBOSE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def path_arg(dir_a, archive_b):
    return os.pathsep.join([str(dir_a), str(archive_b)])


@pytest.mark.cli
def test_find_first_match(path_arg, dir_a, capsys):
    exit_code = main(["--path", path_arg, "find", "foo.txt", "--content"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert f"foo.txt: {dir_a.as_uri()}/foo.txt" in out
    assert "A" in out


@pytest.mark.cli
def test_find_all_as_json(path_arg, dir_a, archive_b, capsys):
    """
    Given: dirA and archiveB both containing foo.txt
    When: Running `pathindex find foo.txt --all --format json --content`
    Then: Both matches are listed in root order with their content
    """
    exit_code = main(["--path", path_arg, "find", "foo.txt", "--all", "--format", "json", "--content"])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert output["found"] is True
    assert [m["origin"] for m in output["matches"]] == [dir_a.as_uri(), archive_b.as_uri()]
    assert [m["content"] for m in output["matches"]] == ["A", "B"]


@pytest.mark.cli
def test_find_missing_exits_one(path_arg, capsys):
    exit_code = main(["--path", path_arg, "find", "nope.txt"])

    assert exit_code == 1
    assert "not found" in capsys.readouterr().err


@pytest.mark.cli
def test_strict_conflict_is_reported(path_arg, capsys):
    exit_code = main(["--path", path_arg, "--strict", "roots"])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "Error:" in err
    assert "foo.txt" in err


@pytest.mark.cli
def test_unsupported_root_is_reported(tmp_path, capsys):
    exit_code = main(["--path", str(tmp_path / "missing.jar"), "roots"])

    assert exit_code == 1
    assert "Unsupported search path root" in capsys.readouterr().err


@pytest.mark.cli
def test_index_dump_yaml(path_arg, dir_a, archive_b, capsys):
    exit_code = main(["--path", path_arg, "index"])

    data = yaml.safe_load(capsys.readouterr().out)
    assert exit_code == 0
    assert data["strict"] is False
    assert data["resources"]["foo.txt"] == dir_a.as_uri()
    assert data["resources"]["bar"] == archive_b.as_uri()
    assert data["resources"]["bar/"] == archive_b.as_uri()
    assert [r["kind"] for r in data["roots"]] == ["directory", "archive"]


@pytest.mark.cli
def test_roots_text(path_arg, dir_a, archive_b, capsys):
    exit_code = main(["--path", path_arg, "roots"])

    lines = capsys.readouterr().out.splitlines()
    assert exit_code == 0
    assert lines == [
        f"  1. [directory] {dir_a.as_uri()}",
        f"  2. [archive] {archive_b.as_uri()}",
    ]


@pytest.mark.cli
def test_config_file_supplies_roots(tmp_path, dir_a, capsys):
    config = tmp_path / "custom.yaml"
    config.write_text(yaml.safe_dump({"roots": [str(dir_a)]}))

    exit_code = main(["--config", str(config), "find", "pkg/sub/a.txt", "--format", "json"])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert output["matches"][0]["origin"] == dir_a.as_uri()


@pytest.mark.cli
def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
