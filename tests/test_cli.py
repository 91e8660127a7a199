import logging

from click.testing import CliRunner

import deltabuild.cli as cli_module


def _fake_builder(captured, exit_code=0):
    class FakeBuilder:
        def __init__(self, **kwargs):
            captured.update(kwargs)

        def run(self):
            return exit_code

    return FakeBuilder


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch):
    config_file = tmp_path / "build.yml"
    config_file.write_text(
        "image_tag: from-config\n" "build_subdir: bindings\n" "command_timeout: 900\n",
        encoding="utf-8",
    )

    captured = {}
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder(captured))

    runner = CliRunner()
    result = runner.invoke(
        cli_module.main,
        [
            "--config",
            str(config_file),
            "--image-tag",
            "from-cli",
            "--dry-run",
        ],
    )

    assert result.exit_code == 0
    assert captured["image_tag"] == "from-cli"
    assert captured["build_subdir"] == "bindings"
    assert captured["command_timeout"] == 900.0
    assert captured["dry_run"] is True


def test_cli_defaults_match_release_build(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0
    assert captured["image_tag"] == "delta-rs-build"
    assert captured["maturin_extra_args"] == "--release --compatibility manylinux_2_28"
    assert captured["build_subdir"] == "python"
    assert captured["workdir"] is None
    assert captured["command_timeout"] is None


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch):
    (tmp_path / ".deltabuild.yml").write_text("image_tag: default-config\n", encoding="utf-8")

    captured = {}
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder(captured))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 0
    assert captured["image_tag"] == "default-config"


def test_cli_exits_with_builder_status(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder({}, exit_code=2))
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 2


def test_cli_reports_invalid_config(tmp_path, monkeypatch):
    (tmp_path / ".deltabuild.yml").write_text("nope: 1\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.main, [])

    assert result.exit_code == 1
    assert "Unknown configuration keys: nope" in result.output


def test_cli_verbose_and_log_file_configure_package_logger(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder({}))
    monkeypatch.chdir(tmp_path)
    log_path = tmp_path / "build.log"
    package_logger = logging.getLogger("deltabuild")
    root_level = logging.getLogger().level
    handlers_before = list(package_logger.handlers)

    try:
        result = CliRunner().invoke(cli_module.main, ["--verbose", "--log-file", str(log_path)])

        assert result.exit_code == 0
        assert package_logger.level == logging.DEBUG
        file_handlers = [
            handler
            for handler in package_logger.handlers
            if isinstance(handler, logging.FileHandler) and handler not in handlers_before
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].baseFilename == str(log_path)
        assert file_handlers[0].level == logging.DEBUG
        assert file_handlers[0].formatter._fmt == "%(asctime)s [%(levelname)s] %(message)s"
    finally:
        for handler in list(package_logger.handlers):
            if handler not in handlers_before:
                package_logger.removeHandler(handler)
                handler.close()
        package_logger.setLevel(logging.NOTSET)
        logging.getLogger().setLevel(root_level)


def test_cli_defaults_to_info_level(tmp_path, monkeypatch):
    monkeypatch.setattr(cli_module, "DeltaBuilder", _fake_builder({}))
    monkeypatch.chdir(tmp_path)
    package_logger = logging.getLogger("deltabuild")

    try:
        result = CliRunner().invoke(cli_module.main, [])

        assert result.exit_code == 0
        assert package_logger.level == logging.INFO
    finally:
        package_logger.setLevel(logging.NOTSET)
