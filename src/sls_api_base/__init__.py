# src/sls_api_base/__init__.py
"""
sls-api-base — hooks de configuração para serviços serverless de API.

Os hooks recebem um descriptor parcial (o conteúdo de um `serverless.yml`)
e devolvem um novo descriptor com defaults opinativos mesclados: role IAM,
configuração do API Gateway, authorizers, globs de empacotamento e plugins.

Arquitetura em alto nível:
    - core.config → deep-merge determinístico, erros tipados e loader
    - core.trace  → configuração injetável da extensão de trace
    - hooks       → base (descriptor do serviço) e authorizers

Limites explícitos:
    - Não executa deploys
    - Não acessa rede
    - Não mantém estado entre chamadas
"""

from .core.config.errors import ConfigError, ConfigTypeConflictError, InvalidArgumentError
from .core.trace import TraceSettings
from .hooks import authorizers, base

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "InvalidArgumentError",
    "TraceSettings",
    "authorizers",
    "base",
]
