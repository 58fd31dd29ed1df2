# src/sls_api_base/core/trace.py
"""
TraceSettings — configuração da extensão de trace injetada no hook base.

A presença da extensão de trace altera o descriptor gerado (variável de
ambiente + layer). Em vez de ler o ambiente do processo dentro do hook,
o valor é representado por um objeto imutável passado explicitamente;
`TraceSettings.from_env()` é apenas a forma conveniente de construí-lo.

Invariantes:
    - A extensão só é considerada habilitada quando conta e versão existem
    - O objeto não carrega estado além dos dois valores
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

_logger = logging.getLogger(__name__)

TRACE_ACCOUNT_ID_ENV = "TRACE_ACCOUNT_ID"
TRACE_EXTENSION_VERSION_ENV = "JANIS_TRACE_EXTENSION_VERSION"


@dataclass(frozen=True)
class TraceSettings:
    """Conta AWS que publica o layer de trace e a versão do layer."""

    account_id: Optional[str] = None
    extension_version: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TraceSettings":
        """Constrói a partir de `TRACE_ACCOUNT_ID` e `JANIS_TRACE_EXTENSION_VERSION`.

        Args:
            environ: mapeamento alternativo ao `os.environ` (útil em testes).
        """
        env = os.environ if environ is None else environ
        settings = cls(
            account_id=env.get(TRACE_ACCOUNT_ID_ENV) or None,
            extension_version=env.get(TRACE_EXTENSION_VERSION_ENV) or None,
        )
        _logger.debug(f"TraceSettings lidos do ambiente: enabled={settings.enabled}")
        return settings

    @property
    def enabled(self) -> bool:
        return bool(self.account_id and self.extension_version)

    def layer_arn(self) -> str:
        return (
            f"arn:aws:lambda:${{aws:region}}:{self.account_id}"
            f":layer:trace:{self.extension_version}"
        )

    def layers(self) -> List[str]:
        return [self.layer_arn()] if self.enabled else []
