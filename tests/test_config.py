import os
from datetime import datetime

import pytest

from vulnscout.config import (
    CONFIG_FILE_NAME,
    Config,
    ConfigError,
    ConfigManager,
    IgnoreEntry,
    config_path_for,
    load_config,
)

CONFIG_TEXT = """
[[IgnoredVulns]]
id = "GO-2022-0968"

[[IgnoredVulns]]
id = "GO-2022-1059"
"""

EXPECTED = [IgnoreEntry(id="GO-2022-0968"), IgnoreEntry(id="GO-2022-1059")]


@pytest.fixture()
def inner(tmp_path):
    root = tmp_path / "testdatainner"
    folder = root / "innerFolder"
    folder.mkdir(parents=True)
    (folder / "test.yaml").write_text("a: b\n")
    (root / "some-manifest.yaml").write_text("a: b\n")
    (root / CONFIG_FILE_NAME).write_text(CONFIG_TEXT)
    return root


@pytest.mark.parametrize(
    ("relative", "expected", "has_error"),
    [
        ("innerFolder/test.yaml", [], True),
        ("innerFolder/", [], True),
        ("innerFolder", [], True),
        ("", EXPECTED, False),
        ("some-manifest.yaml", EXPECTED, False),
    ],
)
def test_load_config(inner, relative, expected, has_error):
    target = os.path.abspath(os.path.join(str(inner), relative))
    config_path = config_path_for(target)
    if has_error:
        with pytest.raises(ConfigError, match="no config file found"):
            load_config(config_path)
    else:
        config = load_config(config_path)
        assert config.ignored_vulns == expected
        assert config.load_path == config_path


def test_config_path_for_missing_target(tmp_path):
    with pytest.raises(ConfigError, match="failed to stat target"):
        config_path_for(str(tmp_path / "missing"))


def test_load_config_invalid_toml(tmp_path):
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text("this is = = not toml")
    with pytest.raises(ConfigError, match="failed to parse config file"):
        load_config(str(path))


def test_load_config_dates(tmp_path):
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(
        '[[IgnoredVulns]]\nid = "A"\nignoreUntil = 2020-01-02\nreason = "old"\n'
    )
    entry = load_config(str(path)).ignored_vulns[0]
    assert entry.ignore_until == datetime(2020, 1, 2)
    assert entry.reason == "old"


def test_should_ignore(tmp_path):
    path = tmp_path / CONFIG_FILE_NAME
    path.write_text(
        '[[IgnoredVulns]]\nid = "FOREVER"\n'
        '[[IgnoredVulns]]\nid = "PAST"\nignoreUntil = 2020-01-01\n'
        '[[IgnoredVulns]]\nid = "FUTURE"\nignoreUntil = 2999-01-01T00:00:00Z\n'
    )
    config = load_config(str(path))

    assert config.should_ignore("FOREVER") == (True, IgnoreEntry(id="FOREVER"))
    ignored, entry = config.should_ignore("PAST")
    assert ignored is False and entry.id == "PAST"
    ignored, entry = config.should_ignore("FUTURE")
    assert ignored is True and entry.id == "FUTURE"
    assert config.should_ignore("OTHER") == (False, IgnoreEntry())


def test_manager_loads_and_caches(inner, capsys):
    manager = ConfigManager()
    target = str(inner / "some-manifest.yaml")

    config = manager.get(target)
    assert config.ignored_vulns == EXPECTED
    assert f"Loaded filter from: {inner / CONFIG_FILE_NAME}" in capsys.readouterr().out

    assert manager.get(str(inner)) is config
    assert capsys.readouterr().out == ""


def test_manager_uses_default_when_no_file(inner):
    default = Config(ignored_vulns=[IgnoreEntry(id="DEFAULT")])
    manager = ConfigManager(default_config=default)
    assert manager.get(str(inner / "innerFolder")) is default


def test_manager_non_file_target(tmp_path):
    manager = ConfigManager(default_config=Config(ignored_vulns=[IgnoreEntry(id="X")]))
    assert manager.get(str(tmp_path / "not-a-file")) == Config()


def test_manager_override(inner, tmp_path):
    manager = ConfigManager()
    manager.use_override(str(inner / CONFIG_FILE_NAME))
    config = manager.get(str(tmp_path / "anything"))
    assert config.ignored_vulns == EXPECTED
    assert config.load_path == str(inner / CONFIG_FILE_NAME)


def test_manager_override_missing(tmp_path):
    with pytest.raises(ConfigError):
        ConfigManager().use_override(str(tmp_path / "missing.toml"))