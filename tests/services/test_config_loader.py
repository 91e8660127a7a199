import pytest

from deltabuild.errors import BuildError
from deltabuild.services.config_loader import ConfigLoader


def test_config_loader_loads_yaml_mapping(tmp_path):
    config_file = tmp_path / ".deltabuild.yml"
    config_file.write_text(
        "image_tag: delta-rs-build-arm\nbuild_subdir: python\ncommand_timeout: 3600\n",
        encoding="utf-8",
    )

    loaded = ConfigLoader().load(str(config_file))

    assert loaded["image_tag"] == "delta-rs-build-arm"
    assert loaded["build_subdir"] == "python"
    assert loaded["command_timeout"] == 3600


def test_config_loader_rejects_unknown_keys(tmp_path):
    config_file = tmp_path / ".deltabuild.yml"
    config_file.write_text("unknown_key: true\n", encoding="utf-8")

    with pytest.raises(BuildError, match="Unknown configuration keys: unknown_key"):
        ConfigLoader().load(str(config_file))


def test_config_loader_rejects_non_mapping_root(tmp_path):
    config_file = tmp_path / ".deltabuild.yml"
    config_file.write_text("- image_tag\n", encoding="utf-8")

    with pytest.raises(BuildError, match="YAML mapping"):
        ConfigLoader().load(str(config_file))


def test_config_loader_returns_empty_for_missing_path_argument():
    assert ConfigLoader().load(None) == {}


def test_config_loader_rejects_wrong_value_type(tmp_path):
    config_file = tmp_path / ".deltabuild.yml"
    config_file.write_text("command_timeout: true\n", encoding="utf-8")

    with pytest.raises(BuildError, match="'command_timeout' must be int or float, got bool"):
        ConfigLoader().load(str(config_file))


def test_config_loader_resolves_paths_relative_to_config_file(tmp_path):
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    config_file = config_dir / ".deltabuild.yml"
    config_file.write_text("workdir: ../delta-rs\nlog_file: build.log\n", encoding="utf-8")

    loaded = ConfigLoader().load(str(config_file))

    assert loaded["workdir"] == str(config_dir.resolve() / ".." / "delta-rs")
    assert loaded["log_file"] == str(config_dir.resolve() / "build.log")
