# src/sls_api_base/core/config/__init__.py
"""
Camada de configuração do sls-api-base.

Este pacote contém os utilitários que os hooks usam para combinar defaults
com a configuração fornecida pelo usuário.

Responsabilidades do pacote:
    - Deep-merge determinístico com marcadores explícitos (Merge / Replace)
    - Tradução das chaves legadas `<nome>Only` em substituições explícitas
    - Carregamento de descriptors existentes (YAML / JSON)

Princípios fundamentais:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma configuração final
    - Conflitos estruturais são tratados como erro
"""

from .errors import (
    ConfigError,
    ConfigNotFoundError,
    ConfigTypeConflictError,
    InvalidArgumentError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .loader import load_config
from .merge import Merge, Replace, deep_merge, resolve_only_keys

__all__ = [
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigTypeConflictError",
    "InvalidArgumentError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "load_config",
    "Merge",
    "Replace",
    "deep_merge",
    "resolve_only_keys",
]
