"""
Compilador de regras de audiencia.

Traduz o documento de regras da campanha em uma query para o Supabase.

Formato das regras:
    {"campo": valor}                      -> campo == valor
    {"campo": {"gt": 100, "lt": 500}}     -> 100 < campo < 500

Operadores: gt, gte, lt, lte, eq, ne. Operadores desconhecidos sao ignorados
(sem erro).

Formato da query compilada:
    {"campo": valor}                      -> igualdade
    {"campo": {"eq": {...}}}              -> igualdade com valor objeto
    {"campo": {"gt": 100, "lt": 500}}     -> filtros PostgREST (gt/gte/lt/lte/neq)
"""
import copy
import logging
from typing import Any, Dict, Mapping, Set

from app.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

# Operador da regra -> filtro PostgREST
OPERADORES_COMPARACAO = {
    "gt": "gt",
    "gte": "gte",
    "lt": "lt",
    "lte": "lte",
    "ne": "neq",
}

OPERADOR_IGUALDADE = "eq"


def compilar_regras(rules: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Compila documento de regras em query.

    Nao altera o documento recebido: a query compilada nunca compartilha
    dicts com a entrada.

    Args:
        rules: Documento de regras da campanha

    Returns:
        Query compilada (campo -> escalar ou dict de filtros)

    Raises:
        DecodeError: Se o documento nao e um mapeamento
    """
    if not isinstance(rules, Mapping):
        raise DecodeError(
            "Regras da campanha devem ser um objeto",
            details={"tipo": type(rules).__name__},
        )

    query: Dict[str, Any] = {}
    faixas: Set[str] = set()

    for campo, regra in rules.items():
        if isinstance(regra, Mapping):
            for operador, valor in regra.items():
                _aplicar_operador(query, faixas, campo, operador, valor)
        else:
            query[campo] = regra

    return query


def _igualdade(valor: Any) -> Any:
    """Escalar passa direto; mapeamento vira {"eq": copia} para nao ser lido como filtros."""
    if isinstance(valor, Mapping):
        return {OPERADOR_IGUALDADE: copy.deepcopy(dict(valor))}
    return valor


def _aplicar_operador(
    query: Dict[str, Any],
    faixas: Set[str],
    campo: str,
    operador: str,
    valor: Any,
) -> None:
    """Acumula um operador no campo, sem sobrescrever os anteriores."""
    if operador == OPERADOR_IGUALDADE:
        # eq substitui qualquer faixa ja montada, igual ao atalho escalar
        query[campo] = _igualdade(valor)
        faixas.discard(campo)
        return

    filtro = OPERADORES_COMPARACAO.get(operador)
    if filtro is None:
        logger.debug(f"Operador desconhecido ignorado: {campo}.{operador}")
        return

    if campo not in faixas:
        # Sem filtros ainda, ou igualdade anterior: comeca do zero
        query[campo] = {}
        faixas.add(campo)
    query[campo][filtro] = valor
