import importlib.metadata
import logging
import pytest
from click.testing import CliRunner
from ordered_map.cli.app import PACKAGE_LOGGER, cli


DOCUMENT = """
b: 2
a: 1
c: three
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[omap]\nkeys-view = "copy"\nlog-level = "warning"\n')
    return str(path)


@pytest.fixture
def document_path(tmp_path):
    path = tmp_path / "doc.yaml"
    path.write_text(DOCUMENT)
    return str(path)


def run(*args):
    runner = CliRunner()
    return runner.invoke(cli, list(args))


def test_show_keys_in_document_order(config_path, document_path):
    result = run("--config", config_path, "show", document_path, "--view", "keys")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["b", "a", "c"]


def test_show_values(config_path, document_path):
    result = run("--config", config_path, "show", document_path, "--view", "values")
    assert result.exit_code == 0, result.output
    assert result.output.splitlines() == ["2", "1", "three"]


def test_show_entries_table(config_path, document_path):
    result = run("--config", config_path, "show", document_path)
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].split() == ["key", "value"]
    assert [line.split() for line in lines[2:]] == [
        ["b", "2"],
        ["a", "1"],
        ["c", "three"],
    ]


def test_show_applies_set_then_delete(config_path, document_path):
    result = run(
        "--config",
        config_path,
        "--keys-view",
        "view",
        "show",
        document_path,
        "--set",
        "a=10",
        "--set",
        "d=4",
        "--delete",
        "b",
        "--view",
        "entries",
    )
    assert result.exit_code == 0, result.output
    rows = [line.split() for line in result.output.splitlines()[2:]]
    assert rows == [["a", "10"], ["c", "three"], ["d", "4"]]


def test_show_warns_on_missing_delete(config_path, document_path):
    result = run(
        "--config", config_path, "show", document_path, "--delete", "zzz", "--view", "keys"
    )
    assert result.exit_code == 0
    assert "Key not found 'zzz'" in result.output


def test_show_rejects_malformed_set(config_path, document_path):
    result = run("--config", config_path, "show", document_path, "--set", "novalue")
    assert result.exit_code != 0
    assert "key=value" in result.output


def test_show_rejects_non_mapping_document(config_path, tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")
    result = run("--config", config_path, "show", str(path))
    assert result.exit_code == 1
    assert "must be a mapping" in result.output


def test_missing_config_file_is_a_warning(tmp_path, document_path):
    missing = str(tmp_path / "missing.toml")
    result = run("--config", missing, "show", document_path, "--view", "keys")
    assert result.exit_code == 0
    assert "Configuration file not found" in result.output
    assert "b" in result.output.splitlines()


def test_invalid_config_value(tmp_path, document_path):
    path = tmp_path / "bad.toml"
    path.write_text('[omap]\nkeys-view = "live"\n')
    result = run("--config", str(path), "show", document_path)
    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_malformed_config_file(tmp_path, document_path):
    path = tmp_path / "broken.toml"
    path.write_text("[omap]\nkeys-view = \n")
    result = run("--config", str(path), "show", document_path)
    assert result.exit_code == 1
    assert "Invalid configuration file" in result.output


def test_omap_key_must_be_a_table(tmp_path, document_path):
    path = tmp_path / "scalar.toml"
    path.write_text('omap = "copy"\n')
    result = run("--config", str(path), "show", document_path)
    assert result.exit_code == 1
    assert "must be a table" in result.output


def test_version_skips_config_loading(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[omap\n")
    result = run("--config", str(path), "version")
    assert result.exit_code == 0, result.output
    assert result.output.strip() == importlib.metadata.version("ordered-map")
    assert "Error" not in result.output
    assert "Warning" not in result.output


def test_log_level_from_config_file(tmp_path, document_path):
    path = tmp_path / "quiet.toml"
    path.write_text('[omap]\nlog-level = "error"\n')
    result = run("--config", str(path), "show", document_path, "--view", "keys")
    assert result.exit_code == 0, result.output
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR


def test_log_level_option_overrides_config_file(tmp_path, document_path, caplog):
    path = tmp_path / "quiet.toml"
    path.write_text('[omap]\nlog-level = "error"\n')
    result = run(
        "--config",
        str(path),
        "--log-level",
        "DEBUG",
        "show",
        document_path,
        "--set",
        "new=1",
        "--view",
        "keys",
    )
    assert result.exit_code == 0, result.output
    assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
    messages = [record.getMessage() for record in caplog.records]
    assert any("Appending key 'new'" in message for message in messages)
