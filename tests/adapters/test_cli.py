import logging
import logging.config
import os
from pathlib import Path

import pytest

from adapters.console import cli
from config import settings
from engines.catalog import Catalog


@pytest.fixture
def restore_logging():
    yield
    logging.config.dictConfig(settings.LOGGING)


def test_version(capsys):
    with pytest.raises(SystemExit) as exit_info:
        cli.build_parser().parse_args(["--version"])
    assert exit_info.value.code == 0
    assert settings.POS_VERSION in capsys.readouterr().out


def test_logging_config_flags(tmp_path):
    log_file = tmp_path / "pos.log"
    config = cli.logging_config(debug=True, log_file=str(log_file))
    assert config["handlers"]["file"]["filename"] == str(log_file)
    assert config["loggers"]["pos"]["level"] == "DEBUG"
    assert settings.LOGGING["loggers"]["pos"]["level"] == "INFO"


def test_file_handler_only_in_cli_config():
    assert "file" not in settings.LOGGING["handlers"]
    assert settings.LOGGING["loggers"]["pos"]["handlers"] == ["console"]

    config = cli.logging_config()
    assert config["handlers"]["file"]["filename"] == settings.POS_LOG_FILE
    assert config["loggers"]["pos"]["handlers"] == ["console", "file"]

    assert not Path(settings.POS_LOG_FILE).is_absolute() or "POS_LOG_FILE" in os.environ


def test_main_exits_cleanly(tmp_path, restore_logging):
    log_file = tmp_path / "pos.log"
    output = []
    answers = iter(["0"])

    code = cli.main(
        ["--log-file", str(log_file)],
        input_fn=lambda prompt: next(answers),
        output_fn=output.append,
    )

    assert code == 0
    assert output[0] == "VERIFICANDO COMPONENTES DEL SISTEMA..."
    assert "   Servicio de inventario... OK (15 productos cargados)" in output
    assert any("BIENVENIDO" in line for line in output)
    for handler in logging.getLogger("pos").handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "INICIO DEL SISTEMA DE CARRITO DE COMPRAS" in text
    assert "Verificación de componentes completada: 15 productos" in text


def test_main_purchase_is_logged(tmp_path, restore_logging):
    log_file = tmp_path / "pos.log"
    answers = iter(["3", "10", "2", "6", "s", "n", "n"])
    output = []

    code = cli.main(
        ["--log-file", str(log_file)],
        input_fn=lambda prompt: next(answers),
        output_fn=output.append,
    )

    assert code == 0
    assert "¡Compra procesada exitosamente!" in output
    for handler in logging.getLogger("pos").handlers:
        handler.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "INVENTARIO - Producto ID:10" in text
    assert "COMPRA - Factura: FACT-" in text


def test_interrupt_returns_130(tmp_path, restore_logging):
    def interrupt(prompt):
        raise KeyboardInterrupt

    code = cli.main(
        ["--log-file", str(tmp_path / "pos.log")],
        input_fn=interrupt,
        output_fn=lambda text: None,
    )
    assert code == 130


def test_empty_catalog_fails_startup_check(tmp_path, restore_logging, monkeypatch):
    monkeypatch.setattr(cli, "build_seeded_catalog", lambda: Catalog())
    output = []

    code = cli.main(
        ["--log-file", str(tmp_path / "pos.log")],
        input_fn=lambda prompt: "0",
        output_fn=output.append,
    )

    assert code == 1
    assert output[-1] == "ERROR CRÍTICO: El inventario no tiene productos cargados"
    assert not any("BIENVENIDO" in line for line in output)
