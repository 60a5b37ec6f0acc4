"""
Repositories - Camada de acesso a dados.

Este modulo implementa o padrao Repository para desacoplar
a logica de negocio do banco de dados.

Uso em testes:
    from app.repositories import ClienteRepository

    def test_buscar_clientes():
        mock_db = MagicMock()
        repo = ClienteRepository(mock_db)
        # Testar sem patches!

Entidades disponiveis:
- Cliente: destinatario de campanhas
"""

from .base import BaseRepository
from .cliente import ClienteRepository, Cliente

__all__ = [
    # Base
    "BaseRepository",
    # Cliente
    "ClienteRepository",
    "Cliente",
]
