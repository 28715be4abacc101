import sys
from pathlib import Path

import pytest

from commandment.__main__ import bootstrap, find_commandment_config, main

MODULE = "main_cli_actions"


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run every test in an empty directory with a fake home and no env config."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    monkeypatch.delenv("COMMANDMENT_CONFIG", raising=False)
    monkeypatch.setattr(sys, "path", list(sys.path))
    monkeypatch.setattr("commandment.__main__.setup_logging", lambda: None)
    yield work
    sys.modules.pop(MODULE, None)


def write_project(directory: Path) -> Path:
    (directory / f"{MODULE}.py").write_text(
        "def hello(result):\n"
        "    print(f\"hello {result['name']}\")\n"
        "    return result['code']\n"
    )
    config = directory / "commandment.yaml"
    config.write_text(
        "name: hi\n"
        "version: 0.3.0\n"
        "commands:\n"
        "  - name: hello\n"
        f"    action: {MODULE}.hello\n"
        "    arguments:\n"
        "      - name: name\n"
        "    options:\n"
        "      - flags: [--code]\n"
        "        type: int\n"
        "        default: 0\n"
    )
    return config


def test_find_config_in_cwd(isolated):
    config = isolated / "commandment.toml"
    config.touch()
    assert find_commandment_config() == config


def test_yaml_preferred_over_toml(isolated):
    (isolated / "commandment.toml").touch()
    (isolated / "commandment.yaml").touch()
    assert find_commandment_config().name == "commandment.yaml"


def test_find_config_from_env(tmp_path, monkeypatch):
    config = tmp_path / "elsewhere.yaml"
    config.touch()
    monkeypatch.setenv("COMMANDMENT_CONFIG", str(config))
    assert find_commandment_config() == config


def test_find_global_config():
    config = Path.home() / ".config" / "commandment" / "commandment.yaml"
    config.parent.mkdir(parents=True)
    config.touch()
    assert find_commandment_config() == config


def test_bootstrap_adds_config_directory_to_path(isolated):
    config = isolated / "commandment.yaml"
    config.touch()
    assert bootstrap() == config
    assert str(isolated) in sys.path


def test_bootstrap_without_config():
    before = list(sys.path)
    assert bootstrap() is None
    assert sys.path == before


def test_main_without_config(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "No commandment.yaml or commandment.toml found." in capsys.readouterr().err


def test_main_runs_the_action(isolated, capsys):
    write_project(isolated)
    with pytest.raises(SystemExit) as excinfo:
        main(["hello", "world", "--code", "4"])
    assert excinfo.value.code == 4
    assert "hello world" in capsys.readouterr().out


def test_main_parse_error(isolated, capsys):
    write_project(isolated)
    with pytest.raises(SystemExit) as excinfo:
        main(["hello"])
    assert excinfo.value.code == 2
    assert "Required argument 'name' missing for command 'hello'." in capsys.readouterr().err


def test_main_version(isolated, capsys):
    write_project(isolated)
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "0.3.0" in capsys.readouterr().out


def test_main_invalid_config(isolated, capsys):
    (isolated / "commandment.yaml").write_text(
        "name: hi\ncommands:\n  - name: broken\n    action: nowhere_module_xyz.run\n"
    )
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert "nowhere_module_xyz" in capsys.readouterr().err
