# src/sls_api_base/core/config/merge.py
"""
Utilitário canônico de deep-merge de descriptors.

Este módulo implementa a política de deep-merge utilizada pelos hooks para
combinar os defaults gerados com a configuração parcial fornecida pelo
usuário (ex.: o conteúdo de um `serverless.yml`).

Política de merge:
    - dict + dict → merge recursivo por chave
    - list + list → concatenação (itens da base primeiro, depois do override)
    - escalar     → sobrescrita direta pelo override
    - Replace(v)  → substituição total da subárvore, sem recursão
    - Merge(v)    → forma explícita da política padrão
    - container vs tipo incompatível → erro estrutural explícito

Princípios fundamentais:
    - O merge é determinístico e puramente funcional
    - Nenhum input é mutado durante o processo
    - A escolha entre merge e substituição é sempre explícita

Invariantes:
    - A mesma entrada sempre produz a mesma saída
    - Chaves presentes apenas no override são preservadas
    - O resultado não compartilha estruturas mutáveis com os inputs

Limites explícitos:
    - Não valida semântica da plataforma de deploy
    - Não interpreta variáveis da ferramenta (`${self:...}`, `${param:...}`)
"""

from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Sequence

from .errors import ConfigTypeConflictError


ONLY_SUFFIX = "Only"


@dataclass(frozen=True)
class Replace:
    """Marca um valor do override que substitui integralmente a subárvore da base."""

    value: Any


@dataclass(frozen=True)
class Merge:
    """Marca um valor do override que segue a política padrão de merge."""

    value: Any


def _materialize(value: Any) -> Any:
    # remove marcadores aninhados: sem base correspondente, ambos equivalem ao valor
    if isinstance(value, (Replace, Merge)):
        return _materialize(value.value)
    if isinstance(value, dict):
        return {k: _materialize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_materialize(v) for v in value]
    return deepcopy(value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre defaults e um override.

    Esta função combina uma configuração base com a configuração fornecida
    pelo usuário, produzindo uma nova estrutura sem mutar nenhum dos inputs.

    Política de merge:
        - dict + dict  → merge recursivo por chave
        - list + list  → base + override (concatenação, ordem preservada)
        - escalar      → sobrescrita direta pelo override
        - Replace(v)   → `v` substitui a subárvore da base por completo
        - Merge(v)     → equivalente a fornecer `v` diretamente

    Decisões arquiteturais:
        - Escalares de tipos distintos não são conflito: variáveis da
          ferramenta de deploy (ex.: "${param:memory}") podem substituir
          um número default
        - Um container (dict/list) contra um tipo incompatível é conflito

    Args:
        base (Dict[str, Any]): Configuração base (ex.: defaults do hook).
        override (Dict[str, Any]): Configuração fornecida pelo usuário.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito estrutural entre base e override.
    """

    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result: Dict[str, Any] = deepcopy(base)

    for key, override_value in override.items():
        # Merge(...) aninhado é desembrulhado até o primeiro valor não-Merge
        while isinstance(override_value, Merge):
            override_value = override_value.value

        # Replace -> sobrescrita total, sem recursão
        if isinstance(override_value, Replace):
            result[key] = _materialize(override_value.value)
            continue

        if key not in result:
            result[key] = _materialize(override_value)
            continue

        base_value = result[key]

        # dict -> merge recursivo
        if isinstance(base_value, dict) and isinstance(override_value, dict):
            result[key] = deep_merge(base_value, override_value)
            continue

        # list -> concatenação
        if isinstance(base_value, list) and isinstance(override_value, list):
            result[key] = base_value + _materialize(override_value)
            continue

        # conflito estrutural
        if isinstance(base_value, (dict, list)) or isinstance(override_value, (dict, list)):
            raise ConfigTypeConflictError(
                f"Conflito de tipo na chave '{key}': "
                f"{type(base_value).__name__} vs {type(override_value).__name__}"
            )

        # escalar -> sobrescrita
        result[key] = _materialize(override_value)

    return result


def resolve_only_keys(
    config: Dict[str, Any],
    paths: Iterable[Sequence[str]],
) -> Dict[str, Any]:
    """
    Converte chaves legadas `<nome>Only` em marcadores `Replace`.

    Para cada caminho informado (ex.: ("package", "include")), se o dict pai
    contiver `includeOnly`, a chave é removida e seu valor passa a ocupar
    `include` embrulhado em `Replace`. Quando ambas existem, a variante
    `Only` prevalece.

    O input não é mutado: a função opera sobre uma cópia profunda.

    Args:
        config: Configuração fornecida pelo usuário.
        paths: Caminhos das chaves que aceitam a variante `Only`.

    Returns:
        Nova configuração com as variantes `Only` resolvidas.
    """
    resolved = deepcopy(config)

    for path in paths:
        *parents, leaf = path
        node: Any = resolved
        for part in parents:
            node = node.get(part) if isinstance(node, dict) else None
        if not isinstance(node, dict):
            continue

        only_key = f"{leaf}{ONLY_SUFFIX}"
        if only_key in node:
            node[leaf] = Replace(node.pop(only_key))

    return resolved
