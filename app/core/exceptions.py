"""
Exceptions customizadas do worker de campanhas.

Cada tipo corresponde a uma classe de falha com politica propria:
- DecodeError: payload malformado, descartado na entrada
- DatabaseError: falha no Supabase
- ExternalAPIError: falha na API de envio, contida por destinatario
- WorkerStartupError: falha de conexao/inscricao no startup (fatal)
"""
from typing import Optional


class WorkerException(Exception):
    """Base exception para todos os erros do sistema."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class DecodeError(WorkerException):
    """Payload de evento nao pode ser decodificado."""
    pass


class DatabaseError(WorkerException):
    """Erro de banco de dados (Supabase)."""
    pass


class ExternalAPIError(WorkerException):
    """Erro de API externa (servico de envio)."""

    def __init__(
        self,
        message: str,
        service: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None
    ):
        self.service = service
        super().__init__(message, details, original_error)


class WorkerStartupError(WorkerException):
    """Falha ao conectar ou inscrever no startup."""
    pass
