"""
Repository para Clientes.

Somente leitura: o worker busca a audiencia de uma campanha a partir
da query compilada das regras.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from app.core.config import settings
from app.core.exceptions import DatabaseError

from .base import BaseRepository

logger = logging.getLogger(__name__)

# Filtros PostgREST aceitos na query compilada
FILTROS_SUPORTADOS = frozenset({"eq", "gt", "gte", "lt", "lte", "neq"})


@dataclass
class Cliente:
    """
    Entidade Cliente.

    Representa um destinatario possivel de campanhas.
    """

    id: str
    nome: Optional[str] = None
    email: Optional[str] = None
    total_spend: Optional[float] = None
    visits: Optional[int] = None
    last_active_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Cliente":
        """Cria Cliente a partir de dict do banco."""
        return cls(
            id=str(data.get("id", "")),
            nome=data.get("name"),
            email=data.get("email"),
            total_spend=data.get("totalSpend"),
            visits=data.get("visits"),
            last_active_date=data.get("lastActiveDate"),
        )


class ClienteRepository(BaseRepository):
    """
    Repository para operacoes de Cliente.

    Uso:
        repo = ClienteRepository(supabase)
        clientes = await repo.buscar_por_query({"totalSpend": {"gt": 100}})
    """

    def __init__(self, db_client: Any, tamanho_pagina: Optional[int] = None):
        super().__init__(db_client)
        self.tamanho_pagina = tamanho_pagina or settings.CUSTOMERS_PAGE_SIZE

    @property
    def table_name(self) -> str:
        return settings.CUSTOMERS_TABLE

    async def buscar_por_query(self, query: Dict[str, Any]) -> List[Cliente]:
        """
        Busca clientes que satisfazem a query compilada.

        Le em paginas ordenadas por id ate uma pagina vir incompleta,
        ja que o PostgREST limita o numero de linhas por resposta.
        Nomes de campo nao sao validados; um campo inexistente e
        avaliado literalmente pelo banco.

        Args:
            query: Query compilada (campo -> escalar ou dict de filtros)

        Returns:
            Lista de clientes na ordem do id

        Raises:
            DatabaseError: Se a consulta falhar
        """
        clientes: List[Cliente] = []
        offset = 0

        try:
            while True:
                response = (
                    self._montar_consulta(query)
                    .order("id")
                    .range(offset, offset + self.tamanho_pagina - 1)
                    .execute()
                )
                pagina = response.data or []
                clientes.extend(Cliente.from_dict(item) for item in pagina)

                if len(pagina) < self.tamanho_pagina:
                    break
                offset += self.tamanho_pagina
        except Exception as e:
            logger.error(f"Erro ao buscar clientes (offset={offset}): {e}")
            raise DatabaseError(
                "Erro ao buscar clientes",
                details={"query": query, "offset": offset},
                original_error=e,
            ) from e

        return clientes

    def _montar_consulta(self, query: Dict[str, Any]):
        """Builder novo com os filtros da query; um por pagina."""
        builder = self.db.table(self.table_name).select("*")

        for campo, condicao in query.items():
            if isinstance(condicao, dict):
                for filtro, valor in condicao.items():
                    if filtro not in FILTROS_SUPORTADOS:
                        raise ValueError(f"Filtro nao suportado: {filtro}")
                    builder = getattr(builder, filtro)(campo, valor)
            elif condicao is None:
                builder = builder.is_(campo, "null")
            else:
                builder = builder.eq(campo, condicao)

        return builder
