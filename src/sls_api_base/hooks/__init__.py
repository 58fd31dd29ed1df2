# src/sls_api_base/hooks/__init__.py
"""
Hooks de configuração do sls-api-base.

Cada hook tem a forma `hook(existing_config, options) -> merged_config`:
recebe a configuração parcial do serviço e devolve uma nova árvore com os
defaults mesclados.

Hooks disponíveis:
    - base        → descriptor completo de um serviço de API
    - authorizers → tabela `custom.authorizers` do JanisAuthorizerService
"""

from .authorizer_catalog import AuthorizerCatalog, AuthorizerSpec
from .authorizer_table import authorizers
from .base_service import base

__all__ = ["AuthorizerCatalog", "AuthorizerSpec", "authorizers", "base"]
