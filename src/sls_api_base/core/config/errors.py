# src/sls_api_base/core/config/errors.py
"""
Exceções canônicas da camada de configuração do sls-api-base.

Este módulo define a hierarquia oficial de exceções utilizadas pelos hooks
durante a validação de opções, o deep-merge de descriptors e o carregamento
de configurações existentes a partir do disco.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Opções inválidas são tratadas como falhas fatais do build
    - Mensagens de erro são claras e direcionadas ao usuário

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção é capturada dentro do pacote

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende da ferramenta de deploy que consome os hooks

Este módulo existe para garantir clareza,
consistência e previsibilidade no tratamento de erros de configuração.
"""

from typing import Any


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do sls-api-base.

    Todas as exceções levantadas durante validação de opções, merge e
    carregamento de configuração devem herdar desta classe, permitindo
    captura genérica pelo build que invoca os hooks.
    """


class InvalidArgumentError(ConfigError, ValueError):
    """
    Exceção levantada quando uma opção de hook está ausente ou malformada.

    Exemplos:
        - `serviceCode` ausente, não-string ou fora do padrão dash-case
        - `servicePort` ausente ou de tipo inválido
        - `accountId` ausente

    Decisões arquiteturais:
        - Herda de `ValueError` para integração com código que já captura
          erros de valor genéricos
        - Carrega o nome da opção e o valor recebido para diagnóstico

    Limites explícitos:
        - Não tenta normalizar ou corrigir o valor recebido
    """

    def __init__(self, option: str, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.option = option
        self.value = value


class ConfigTypeConflictError(ConfigError):
    """
    Exceção levantada quando ocorre conflito estrutural durante o deep-merge.

    Este erro indica que uma mesma chave possui um container (dict ou list)
    de um lado e um tipo incompatível do outro.

    Exemplo de conflito:
        - defaults: {"provider": {"memorySize": 1024}}
        - override: {"provider": "aws"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito

    Limites explícitos:
        - Escalares de tipos distintos não são conflito (o override vence)
        - Não realiza coerção ou conversão de tipos
    """


class ConfigNotFoundError(ConfigError):
    """
    Exceção levantada quando o arquivo de configuração informado
    não existe no caminho especificado.
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Exceção levantada quando o formato do arquivo de configuração
    não é suportado pelo loader.

    Formatos suportados:
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidConfigRootTypeError(ConfigError):
    """
    Exceção levantada quando o conteúdo raiz da configuração
    não é um dicionário (`dict`).

    Decisões arquiteturais:
        - Um descriptor é sempre um mapa chave-valor
        - Listas ou valores escalares no root são inválidos
    """
