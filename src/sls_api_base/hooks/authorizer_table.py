# src/sls_api_base/hooks/authorizer_table.py
"""
Hook de authorizers: tabela `custom.authorizers` do serviço.

Gera as entradas do `AuthorizerCatalog` para o account id informado e as
mescla sobre a configuração existente. Authorizers definidos pelo usuário
e demais chaves de `custom` são preservados.

Decisões arquiteturais:
    - Uma entrada do usuário com o mesmo nome de um authorizer do catálogo
      é mesclada (deep-merge), não substituída: os campos do catálogo
      prevalecem e chaves extras do usuário permanecem
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ..core.config.errors import InvalidArgumentError
from ..core.config.merge import deep_merge
from .authorizer_catalog import AuthorizerCatalog

_logger = logging.getLogger(__name__)


def validate_account_id(account_id: Any) -> str:
    if account_id is None or account_id == "":
        raise InvalidArgumentError("accountId", "Opção accountId ausente no hook")
    if not isinstance(account_id, str):
        raise InvalidArgumentError(
            "accountId",
            f"Opção accountId deve ser string, recebido: {type(account_id).__name__}",
            account_id,
        )
    return account_id


def authorizers(
    existing_config: Optional[Dict[str, Any]],
    options: Optional[Mapping[str, Any]],
    catalog: Optional[AuthorizerCatalog] = None,
) -> Dict[str, Any]:
    """
    Mescla a tabela de authorizers na configuração existente.

    Args:
        existing_config: Configuração parcial do serviço (não é mutada).
        options: Opções do hook; requer `accountId` (string, ex.: "012345678910").
        catalog: Catálogo alternativo; por padrão `AuthorizerCatalog.v1()`.

    Returns:
        Dict[str, Any]: Novo descriptor com `custom.authorizers` preenchido.

    Raises:
        InvalidArgumentError: Se `accountId` estiver ausente ou não for string.
        ConfigTypeConflictError: Se `custom` ou `custom.authorizers` existentes
            não forem dicts.
    """
    options = options or {}
    account_id = validate_account_id(options.get("accountId"))
    catalog = catalog or AuthorizerCatalog.v1()

    generated = catalog.build(account_id)
    _logger.debug(f"Gerando {len(generated)} authorizers para a conta {account_id}")

    return deep_merge(existing_config or {}, {"custom": {"authorizers": generated}})
