import pytest

from lbcatalog.config.loader import (
    DEFAULT_CONFIG,
    ConfigError,
    get_config_value,
    load_config,
    merge_dicts,
)


@pytest.mark.unit
def test_load_config_merges_defaults(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
launchbox:
  installdir: /mnt/games/LaunchBox
logging:
  level: DEBUG
"""
    )

    cfg = load_config(str(config_path))

    assert cfg["launchbox"]["installdir"] == "/mnt/games/LaunchBox"
    assert cfg["launchbox"]["command_fallback"] == "emulator_path"
    assert cfg["logging"]["level"] == "DEBUG"
    assert cfg["logging"]["console"] is True


@pytest.mark.unit
def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "does-not-exist.yaml")


@pytest.mark.unit
def test_load_config_without_path_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    cfg = load_config()

    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


@pytest.mark.unit
def test_load_config_without_path_reads_cwd(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("launchbox:\n  command_fallback: none\n")
    monkeypatch.chdir(tmp_path)

    assert load_config()["launchbox"]["command_fallback"] == "none"


@pytest.mark.unit
def test_load_config_invalid_yaml(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("invalid: [unclosed")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(str(config_path))


@pytest.mark.unit
def test_load_config_empty_file(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("")

    assert load_config(config_path) == DEFAULT_CONFIG


@pytest.mark.unit
def test_load_config_rejects_non_mapping(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="dictionary"):
        load_config(config_path)


@pytest.mark.unit
def test_merge_dicts_does_not_mutate_base():
    base = {"a": {"b": 1, "c": 2}}

    merged = merge_dicts(base, {"a": {"c": 3}, "d": 4})

    assert merged == {"a": {"b": 1, "c": 3}, "d": 4}
    assert base == {"a": {"b": 1, "c": 2}}


@pytest.mark.unit
def test_get_config_value():
    cfg = {"launchbox": {"installdir": "/lb"}}

    assert get_config_value(cfg, "launchbox.installdir") == "/lb"
    assert get_config_value(cfg, "launchbox.missing", "x") == "x"
    assert get_config_value(cfg, "launchbox.installdir.deeper") is None
