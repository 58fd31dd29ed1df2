"""AuthorizerCatalog v1 — catálogo estático de authorizers do API Gateway.

Cada entrada aponta para uma função do JanisAuthorizerService. O catálogo é
fixo: apenas o account id altera os ARNs gerados, e o stage permanece como
variável da ferramenta de deploy (`${self:custom.stage}`).

Invariantes:
- determinístico (mesmo account id, mesma saída)
- nomes únicos por catálogo
- falha explícita para authorizer desconhecido
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

AUTHORIZER_REGION = "us-east-1"
AUTHORIZER_SERVICE = "JanisAuthorizerService"
IDENTITY_HEADER_PREFIX = "method.request.header."

# headers de identidade
CLIENT = "janis-client"
API_KEY = "janis-api-key"
API_SECRET = "janis-api-secret"
SERVICE = "janis-service"
ENTITY = "janis-entity"


@dataclass(frozen=True)
class AuthorizerSpec:
    """Especificação de um authorizer do tipo request."""

    name: str
    function_name: str
    identity_headers: Tuple[str, ...]
    result_ttl_in_seconds: int = 300
    type: str = "request"

    def arn(self, account_id: str) -> str:
        return (
            f"arn:aws:lambda:{AUTHORIZER_REGION}:{account_id}:function:"
            f"{AUTHORIZER_SERVICE}-${{self:custom.stage}}-{self.function_name}"
        )

    def identity_source(self) -> str:
        return ",".join(f"{IDENTITY_HEADER_PREFIX}{h}" for h in self.identity_headers)

    def to_dict(self, account_id: str) -> Dict[str, Any]:
        return {
            "name": self.name,
            "arn": self.arn(account_id),
            "resultTtlInSeconds": self.result_ttl_in_seconds,
            "identitySource": self.identity_source(),
            "type": self.type,
        }


class AuthorizerCatalog:
    """Catálogo ordenado de AuthorizerSpec."""

    def __init__(self, specs: Optional[Iterable[AuthorizerSpec]] = None) -> None:
        self._specs: Dict[str, AuthorizerSpec] = {}
        if specs:
            for s in specs:
                self.register(s)

    @classmethod
    def v1(cls) -> "AuthorizerCatalog":
        """Factory do catálogo v1 (authorizers do JanisAuthorizerService)."""
        return cls(specs=_default_specs_v1())

    def register(self, spec: AuthorizerSpec) -> None:
        if not isinstance(spec, AuthorizerSpec):
            raise TypeError("spec must be an AuthorizerSpec")
        if spec.name in self._specs:
            raise ValueError(f"duplicate authorizer name: {spec.name}")
        self._specs[spec.name] = spec

    def names(self) -> List[str]:
        return list(self._specs)

    def get(self, name: str) -> AuthorizerSpec:
        if name not in self._specs:
            raise KeyError(f"unknown authorizer: {name}")
        return self._specs[name]

    def build(self, account_id: str) -> Dict[str, Dict[str, Any]]:
        """Gera o bloco `custom.authorizers` para a conta informada."""
        return {name: spec.to_dict(account_id) for name, spec in self._specs.items()}


def _default_specs_v1() -> List[AuthorizerSpec]:
    return [
        AuthorizerSpec("FullAuthorizer", "FullAuthorizer", (CLIENT, API_KEY, API_SECRET)),
        AuthorizerSpec("NoClientAuthorizer", "NoClientAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("LoggedAuthorizer", "LoggedAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("ApiKeyAuthorizer", "ApiKeyAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("UserAuthorizer", "UserAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("DevUserAuthorizer", "DevUserAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("ServiceAuthorizer", "ServiceAuthorizer", (CLIENT, API_KEY, API_SECRET)),
        # mesma função do ServiceAuthorizer, sem exigir janis-client
        AuthorizerSpec("ServiceNoClientAuthorizer", "ServiceAuthorizer", (API_KEY, API_SECRET)),
        AuthorizerSpec("ClientAuthorizer", "ClientAuthorizer", (CLIENT,)),
        AuthorizerSpec("ImportExportAuthorizer", "ImportExportAuthorizer", (API_KEY, API_SECRET, ENTITY)),
        AuthorizerSpec("ImportAuthorizer", "ImportAuthorizer", (API_KEY, API_SECRET, SERVICE, ENTITY)),
        AuthorizerSpec("ExportAuthorizer", "ExportAuthorizer", (API_KEY, API_SECRET, ENTITY)),
    ]
