"""
Base Repository - Interface comum para todos os repositories.

Os repositories recebem o cliente de banco por injecao, para que
testes usem um mock sem patches de import.
"""
from abc import ABC, abstractmethod
from typing import Any


class BaseRepository(ABC):
    """
    Interface base para repositories.

    Attributes:
        db: Cliente de banco de dados (Supabase, Mock, etc.)
        table_name: Nome da tabela no banco de dados

    Example:
        class ClienteRepository(BaseRepository):
            @property
            def table_name(self) -> str:
                return "customers"
    """

    def __init__(self, db_client: Any):
        """
        Inicializa o repository.

        Args:
            db_client: Cliente de banco de dados (Supabase, Mock, etc.)
        """
        self.db = db_client

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Nome da tabela no banco."""
        pass
