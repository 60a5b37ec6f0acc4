"""Testes da configuração de logging."""
import json
import logging

import pytest

from app.core.logging import ColoredFormatter, JSONFormatter, get_logger, setup_logging


def criar_record(msg: str = "Campanha processada", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.teste",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for chave, valor in extra.items():
        setattr(record, chave, valor)
    return record


@pytest.fixture
def restaurar_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


class TestJSONFormatter:

    def test_formata_json(self):
        saida = json.loads(JSONFormatter().format(criar_record()))

        assert saida["level"] == "INFO"
        assert saida["logger"] == "app.teste"
        assert saida["message"] == "Campanha processada"

    def test_inclui_campos_extras(self):
        record = criar_record(extra_fields={"campaign_id": "camp-1"})

        saida = json.loads(JSONFormatter().format(record))

        assert saida["campaign_id"] == "camp-1"

    def test_timestamp_do_record(self):
        record = criar_record()
        record.created = 0.0

        saida = json.loads(JSONFormatter().format(record))

        assert saida["timestamp"] == "1970-01-01T00:00:00+00:00"


class TestColoredFormatter:

    def test_colore_level(self):
        formatter = ColoredFormatter(fmt="%(levelname)s %(message)s")

        saida = formatter.format(criar_record())

        assert "\033[32m" in saida
        assert "Campanha processada" in saida

    def test_nao_altera_record_original(self):
        record = criar_record()

        ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

        assert record.levelname == "INFO"


class TestGetLogger:

    def test_sem_extras_retorna_logger(self):
        assert get_logger("app.teste") is logging.getLogger("app.teste")

    def test_extras_anexados_ao_record(self, caplog):
        log = get_logger("app.teste", campaign_id="camp-9")

        with caplog.at_level(logging.INFO, logger="app.teste"):
            log.info("Processando campanha")

        assert caplog.records[0].extra_fields == {"campaign_id": "camp-9"}


class TestSetupLogging:

    def test_producao_usa_json(self, restaurar_root_logger):
        setup_logging(environment="production", log_level="WARNING")

        root = restaurar_root_logger
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert root.level == logging.WARNING

    def test_desenvolvimento_usa_cores(self, restaurar_root_logger):
        setup_logging(environment="development", log_level="DEBUG")

        root = restaurar_root_logger
        assert isinstance(root.handlers[0].formatter, ColoredFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_level_invalido_usa_info(self, restaurar_root_logger):
        setup_logging(environment="development", log_level="verboso")

        assert restaurar_root_logger.level == logging.INFO
