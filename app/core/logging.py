"""
Configuração de logging estruturado.

Em produção: JSON para facilitar parsing por ferramentas de log
Em desenvolvimento: Formato legível para humanos
"""
import logging
import sys
import json
from datetime import datetime, timezone
from typing import Any, Optional

from app.core.config import settings


class JSONFormatter(logging.Formatter):
    """Uma linha JSON por record, com os campos extras do get_logger()."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(getattr(record, "extra_fields", {}))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Formato legivel com o level colorido; o record original nao e alterado."""

    CORES = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        cor = self.CORES.get(record.levelno)
        if cor is None:
            return super().format(record)

        colorido = logging.makeLogRecord(record.__dict__)
        colorido.levelname = f"{cor}{record.levelname}{self.RESET}"
        return super().format(colorido)


class _ExtraFieldsAdapter(logging.LoggerAdapter):
    """Anexa campos fixos a cada record (lidos pelo JSONFormatter)."""

    def process(self, msg, kwargs):
        extra = kwargs.setdefault("extra", {})
        extra["extra_fields"] = {**self.extra, **extra.get("extra_fields", {})}
        return msg, kwargs


def get_logger(name: str, **extra_fields: Any) -> logging.Logger | logging.LoggerAdapter:
    """
    Retorna logger com campos extras opcionais.

    Usage:
        logger = get_logger(__name__, campaign_id="123")
        logger.info("Processando campanha")
    """
    logger = logging.getLogger(name)

    if extra_fields:
        return _ExtraFieldsAdapter(logger, extra_fields)

    return logger


def setup_logging(environment: Optional[str] = None, log_level: Optional[str] = None):
    """Configura logging do worker baseado no ambiente."""
    environment = (environment or settings.ENVIRONMENT).lower()
    log_level = (log_level or settings.LOG_LEVEL).upper()

    # Remover handlers existentes
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Criar handler para stdout
    handler = logging.StreamHandler(sys.stdout)

    if environment == "production":
        # Produção: JSON estruturado
        handler.setFormatter(JSONFormatter())
    else:
        # Desenvolvimento: formato legível colorido
        handler.setFormatter(ColoredFormatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Reduzir verbosidade de libs externas
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
