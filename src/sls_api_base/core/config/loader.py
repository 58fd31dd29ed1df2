# src/sls_api_base/core/config/loader.py
"""
Loader de descriptors existentes.

Este módulo permite alimentar os hooks a partir de um arquivo em disco
(tipicamente o `serverless.yml` parcial de um serviço), validando apenas
os requisitos estruturais mínimos.

Responsabilidades do módulo:
    - Carregar arquivos de configuração em YAML ou JSON
    - Validar que o conteúdo raiz é um dicionário
    - Interpretar arquivos vazios como descriptors vazios

Limites explícitos:
    - Não aplica defaults nem executa hooks
    - Não valida semântica da plataforma de deploy
    - Não resolve variáveis da ferramenta (`${self:...}`)
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # PyYAML

from .errors import (
    ConfigNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)

_logger = logging.getLogger(__name__)


def load_config(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Carrega um descriptor parcial a partir de um arquivo YAML ou JSON.

    Formatos suportados:
        - YAML (.yaml, .yml), via `yaml.safe_load`
        - JSON (.json)

    Decisões arquiteturais:
        - O arquivo deve existir no momento do carregamento
        - Arquivos vazios são interpretados como dicionários vazios
        - Erros de parsing são registrados e propagados sem alteração

    Args:
        path: Caminho para o arquivo de configuração.

    Returns:
        Dict[str, Any]: Conteúdo do arquivo carregado como dicionário.

    Raises:
        ConfigNotFoundError: Se o arquivo não existir.
        UnsupportedConfigFormatError: Se o formato do arquivo não for suportado.
        InvalidConfigRootTypeError: Se o conteúdo raiz não for um dicionário.
    """
    config_file = Path(path)

    if not config_file.exists():
        raise ConfigNotFoundError(f"Arquivo de configuração não encontrado: {config_file}")

    suffix = config_file.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        try:
            with config_file.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            _logger.error(f"Falha ao interpretar YAML em {config_file}: {e}")
            raise

    elif suffix == ".json":
        try:
            with config_file.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            _logger.error(f"Falha ao interpretar JSON em {config_file}: {e}")
            raise

    else:
        raise UnsupportedConfigFormatError(f"Formato não suportado: {config_file.suffix}")

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise InvalidConfigRootTypeError(
            f"Config root deve ser dict, recebido: {type(data).__name__}"
        )

    _logger.debug(f"Descriptor carregado de {config_file} ({len(data)} chaves)")
    return data
