# src/sls_api_base/hooks/base_service.py
"""
Hook base: descriptor completo de um serviço de API.

Este módulo implementa o hook que recebe a configuração parcial de um
serviço e devolve o descriptor completo, com os defaults de
`service_defaults` mesclados sob a política de `core.config.merge`.

Fluxo:
    1. Validação das opções (`serviceCode`, `servicePort`)
    2. Derivação de nome e título a partir do código
    3. Montagem dos defaults (VPC e trace são condicionais)
    4. Tradução das chaves legadas `*Only` em `Replace`
    5. Deep-merge defaults + configuração do usuário

Decisões arquiteturais:
    - A configuração de trace é injetada via `TraceSettings`; o ambiente
      do processo só é consultado quando nenhum valor é fornecido
    - Valores do usuário prevalecem sobre escalares default
    - Listas do usuário são adicionadas após as listas default

Limites explícitos:
    - Não valida o schema da plataforma de deploy
    - Não resolve variáveis `${...}`
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..core.config.errors import InvalidArgumentError
from ..core.config.merge import deep_merge, resolve_only_keys
from ..core.trace import TraceSettings
from .service_defaults import build_base_defaults

_logger = logging.getLogger(__name__)

# letras minúsculas (incluindo acentuadas latin-1), dígitos, segmentos separados por hífen
SERVICE_CODE_PATTERN = re.compile(r"[a-z0-9à-öø-ÿ]+(?:-[a-z0-9à-öø-ÿ]+)*")

# chaves que aceitam a variante `<nome>Only` (substituição total)
REPLACEABLE_PATHS: Tuple[Tuple[str, ...], ...] = (
    ("package", "include"),
    ("package", "exclude"),
    ("plugins",),
)


def validate_service_code(service_code: Any) -> str:
    if service_code is None:
        raise InvalidArgumentError("serviceCode", "Opção serviceCode ausente no hook")
    if not isinstance(service_code, str):
        raise InvalidArgumentError(
            "serviceCode",
            f"Opção serviceCode deve ser string, recebido: {type(service_code).__name__}",
            service_code,
        )
    if not SERVICE_CODE_PATTERN.fullmatch(service_code):
        raise InvalidArgumentError(
            "serviceCode",
            f"Opção serviceCode deve estar em dash-case, recebido: {service_code!r}",
            service_code,
        )
    return service_code


def validate_service_port(service_port: Any) -> int:
    if service_port is None:
        raise InvalidArgumentError("servicePort", "Opção servicePort ausente no hook")
    # bool é subclasse de int
    if isinstance(service_port, bool):
        raise InvalidArgumentError("servicePort", "Opção servicePort deve ser numérica", service_port)
    if isinstance(service_port, int):
        return service_port
    if isinstance(service_port, str) and service_port.isdecimal():
        return int(service_port)
    raise InvalidArgumentError(
        "servicePort",
        f"Opção servicePort deve ser int ou string numérica, recebido: {service_port!r}",
        service_port,
    )


def _code_words(service_code: str) -> List[str]:
    return [w[:1].upper() + w[1:] for w in service_code.split("-")]


def service_name_from_code(service_code: str) -> str:
    """`valid-code` → `ValidCode`."""
    return "".join(_code_words(service_code))


def service_title_from_code(service_code: str) -> str:
    """`valid-code` → `Valid Code`."""
    return " ".join(_code_words(service_code))


def _has_vpc(config: Any) -> bool:
    if not isinstance(config, dict):
        return False
    provider = config.get("provider")
    return isinstance(provider, dict) and bool(provider.get("vpc"))


def base(
    existing_config: Optional[Dict[str, Any]],
    options: Optional[Mapping[str, Union[str, int]]],
    trace: Optional[TraceSettings] = None,
) -> Dict[str, Any]:
    """
    Mescla o descriptor base de um serviço de API na configuração existente.

    Args:
        existing_config: Configuração parcial do serviço (não é mutada).
        options: Opções do hook; requer `serviceCode` (dash-case) e
            `servicePort` (int ou string numérica).
        trace: Configuração da extensão de trace. Quando `None`, é lida
            de `TRACE_ACCOUNT_ID` / `JANIS_TRACE_EXTENSION_VERSION`.

    Returns:
        Dict[str, Any]: Novo descriptor resolvido.

    Raises:
        InvalidArgumentError: Se `serviceCode` ou `servicePort` forem inválidos.
        ConfigTypeConflictError: Se a configuração existente conflitar
            estruturalmente com os defaults.
    """
    existing_config = existing_config or {}
    options = options or {}

    service_code = validate_service_code(options.get("serviceCode"))
    service_port = validate_service_port(options.get("servicePort"))

    if trace is None:
        trace = TraceSettings.from_env()

    vpc_access = _has_vpc(existing_config)
    trace_layers = trace.layers()

    if vpc_access:
        _logger.debug("provider.vpc presente: anexando policy de acesso à VPC")
    if trace_layers:
        _logger.debug(f"Extensão de trace habilitada: {trace_layers[0]}")

    defaults = build_base_defaults(
        service_code=service_code,
        service_name=service_name_from_code(service_code),
        service_title=service_title_from_code(service_code),
        service_port=service_port,
        vpc_access=vpc_access,
        trace_layers=trace_layers,
    )

    user_config = resolve_only_keys(existing_config, REPLACEABLE_PATHS)

    return deep_merge(defaults, user_config)
