"""
Configuração global de testes - Fixtures compartilhadas.

Os collaborators (Supabase, Redis, API de envio) sao injetados, entao
os testes usam mocks passados no construtor em vez de patches de import.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from typing import Any


# =============================================================================
# MOCK FACTORIES - Funções para criar mocks configuráveis
# =============================================================================


def criar_mock_supabase(dados_retorno: list[dict[str, Any]] | None = None) -> MagicMock:
    """
    Cria mock do cliente Supabase com chain de métodos configurado.

    Args:
        dados_retorno: Lista de dicts que será retornada em .execute().data

    Returns:
        MagicMock configurado para suportar chain: .table().select().gt().order().range().execute()

    Example:
        mock = criar_mock_supabase([{"id": "123", "name": "Ana"}])
        mock.table("customers").select("*").execute().data  # retorna os dados
    """
    mock = MagicMock()
    mock.table.return_value = mock
    mock.select.return_value = mock
    mock.update.return_value = mock
    mock.eq.return_value = mock
    mock.neq.return_value = mock
    mock.gt.return_value = mock
    mock.gte.return_value = mock
    mock.lt.return_value = mock
    mock.lte.return_value = mock
    mock.is_.return_value = mock
    mock.order.return_value = mock
    mock.range.return_value = mock

    # Configurar response
    response = MagicMock()
    response.data = dados_retorno if dados_retorno is not None else []
    mock.execute.return_value = response

    return mock


def criar_mock_pubsub(mensagens: list[dict[str, Any] | None] | None = None) -> MagicMock:
    """
    Cria mock de PubSub do redis.asyncio.

    Args:
        mensagens: Retornos sucessivos de get_message (None = timeout)
    """
    mock = MagicMock()
    mock.subscribe = AsyncMock(return_value=None)
    mock.unsubscribe = AsyncMock(return_value=None)
    mock.aclose = AsyncMock(return_value=None)
    mock.get_message = AsyncMock(side_effect=list(mensagens or []))
    return mock


def criar_mock_redis(pubsub: MagicMock | None = None) -> MagicMock:
    """
    Cria mock do cliente Redis.

    Returns:
        MagicMock com ping/aclose async e pubsub() configurado
    """
    mock = MagicMock()
    mock.ping = AsyncMock(return_value=True)
    mock.aclose = AsyncMock(return_value=None)
    mock.pubsub.return_value = pubsub or criar_mock_pubsub()
    return mock


def mensagem_canal(data: Any, canal: str = "campaign:new") -> dict[str, Any]:
    """Mensagem no formato devolvido por PubSub.get_message."""
    return {"type": "message", "pattern": None, "channel": canal, "data": data}


# =============================================================================
# FIXTURES DE MOCKS - Serviços Externos
# =============================================================================


@pytest.fixture
def mock_supabase():
    """Mock do cliente Supabase sem dados."""
    return criar_mock_supabase()


@pytest.fixture
def mock_supabase_factory():
    """
    Factory para criar mocks de Supabase com dados específicos.

    Uso:
        def test_algo(mock_supabase_factory):
            mock = mock_supabase_factory([{"id": "123"}])
    """
    return criar_mock_supabase


@pytest.fixture
def mock_redis():
    """Mock do cliente Redis com pubsub vazio."""
    return criar_mock_redis()
