# src/sls_api_base/hooks/service_defaults.py
"""
Defaults do descriptor base de um serviço de API.

Este módulo concentra os literais que o hook base mescla na configuração do
usuário: bloco `provider`, params por stage, globs de empacotamento, lista
de plugins, bloco `custom` e os recursos CloudFormation (role de execução
e respostas de erro do API Gateway).

Os valores que contêm `${...}` são variáveis da ferramenta de deploy e são
repassados literalmente; nenhum deles é resolvido aqui.

Invariantes:
    - Cada chamada retorna uma árvore nova (sem estado compartilhado)
    - Os únicos parâmetros são os derivados do código e da porta do serviço
"""

from __future__ import annotations

import json
from typing import Any, Dict, Sequence, Tuple

# (stage, nome legível, domínio)
STAGES: Tuple[Tuple[str, str, str], ...] = (
    ("local", "Local", "janis.localhost"),
    ("beta", "Beta", "janisdev.in"),
    ("qa", "QA", "janisqa.in"),
    ("prod", "Prod", "janis.in"),
)

OFFLINE_LAMBDA_PORT_OFFSET = 20000

VPC_ACCESS_POLICY_ARN = "arn:aws:iam::aws:policy/service-role/AWSLambdaVPCAccessExecutionRole"

DEFAULT_PLUGINS: Tuple[str, ...] = (
    "serverless-domain-manager",
    "serverless-offline",
    "serverless-api-gateway-caching",
    "serverless-plugin-stage-variables",
    "@janiscommerce/serverless-plugin-remove-authorizer-permissions",
    "serverless-plugin-split-stacks",
)

DEFAULT_PACKAGE_INCLUDE: Tuple[str, ...] = (
    "src/config/*",
)

DEFAULT_PACKAGE_EXCLUDE: Tuple[str, ...] = (
    ".nyc_output/**",
    ".bitbucket/**",
    ".deploy/**",
    ".husky/**",
    "view-schemas/**",
    "view-schemas-built/**",
    "view-schemas-built-local/**",
    "tests/**",
    "test-reports/**",
    "hooks/**",
    "events/**",
    "permissions/**",
    "schemas/src/**",
    "serverless/**",
    "src/environments/**",
    "*",
    ".*",
    "node_modules/.cache/**",
    "node_modules/**/README.md",
    "node_modules/**/.github/**",
    "node_modules/**/CHANGELOG.md",
    "node_modules/**/LICENSE",
    "node_modules/**/*.js.map",
    "node_modules/**/*.map",
    "node_modules/**/*.min.map",
    "node_modules/**/*.js.flow",
    "node_modules/**/*.d.ts",
    "node_modules/function.prototype.name/**",
    "node_modules/which-typed-array/**",
    "node_modules/is-typed-array/**",
    "mongodb/src/**",
    "bson/dist/**",
    "bson/src/**",
    "node_modules/aws-sdk/**",
    "node_modules/**/aws-sdk/**",
    "node_modules/sinon/**",
    "node_modules/serverless/**",
    "node_modules/@serverless/**",
    "node_modules/@babel/**",
    "node_modules/eslint-plugin-import/**",
    "node_modules/@sinonjs/**",
    "node_modules/faker/dist/**",
    "node_modules/date-fns/esm/**",
    "node_modules/date-fns/fp/**",
    "node_modules/**/date-fns/docs/**",
    "node_modules/**/buffer/test/**",
    "node_modules/**/jmespath/test/**",
    "node_modules/**/qs/test/**",
    "node_modules/**/qs/dist/**",
    "node_modules/**/bson/browser_build/**",
    "node_modules/**/axios/dist/browser/**",
    "node_modules/**/axios/dist/esm/**",
)

# campos do access log do API Gateway, na ordem em que são serializados
ACCESS_LOG_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("date", "$context.requestTime"),
    ("reqId", "$context.requestId"),
    ("integReqId", "$context.integration.requestId"),
    ("ip", "$context.identity.sourceIp"),
    ("ua", "$context.identity.userAgent"),
    ("clientCode", "$context.authorizer.clientCode"),
    ("principalId", "$context.authorizer.principalId"),
    ("reqMethod", "$context.httpMethod"),
    ("path", "$context.resourcePath"),
    ("realPath", "$context.path"),
    ("status", "$context.status"),
    ("authTime", "$context.authorizer.latency"),
    ("resTime", "$context.responseLatency"),
    ("gwError", "$context.error.message"),
    ("integError", "$context.integration.error"),
)

_ERROR_TEMPLATE_WITH_DETAIL = (
    '{"message":$context.error.messageString,'
    '"detail":"$context.authorizer.errorMessage",'
    '"authorizerErrorType":"$context.error.responseType"}'
)

# (recurso, ResponseType, StatusCode, template)
GATEWAY_RESPONSES: Tuple[Tuple[str, str, str, str], ...] = (
    (
        "UnauthorizedResponse",
        "UNAUTHORIZED",
        "401",
        '{"message":$context.error.messageString,"authorizerErrorType":"$context.error.responseType"}',
    ),
    ("BadRequestBodyResponse", "BAD_REQUEST_BODY", "400", _ERROR_TEMPLATE_WITH_DETAIL),
    ("BadRequestParameters", "BAD_REQUEST_PARAMETERS", "400", _ERROR_TEMPLATE_WITH_DETAIL),
    ("AccessDeniedResponse", "ACCESS_DENIED", "403", _ERROR_TEMPLATE_WITH_DETAIL),
    (
        "AuthorizerConfigurationErrorResponse",
        "AUTHORIZER_CONFIGURATION_ERROR",
        "500",
        _ERROR_TEMPLATE_WITH_DETAIL,
    ),
    ("AuthorizerFailureResponse", "AUTHORIZER_FAILURE", "500", _ERROR_TEMPLATE_WITH_DETAIL),
    (
        "IntegrationTimeoutResponse",
        "INTEGRATION_TIMEOUT",
        "504",
        '{"message":"Timeout","authorizerErrorType":"$context.error.responseType"}',
    ),
)


def access_log_format() -> str:
    """Formato JSON compacto do access log do REST API."""
    return json.dumps(dict(ACCESS_LOG_FIELDS), separators=(",", ":"))


def build_provider() -> Dict[str, Any]:
    return {
        "name": "aws",
        "runtime": "nodejs18.x",
        "memorySize": 1024,
        "stage": "${opt:stage, 'local'}",
        "region": "${opt:region, 'us-east-1'}",
        "role": "ServiceExecutionRole",
        "endpointType": "REGIONAL",
        "apiName": "JANIS ${param:humanReadableStage} ${self:custom.serviceTitle} API",
        "logRetentionInDays": 14,
        "environment": {
            "JANIS_SERVICE_NAME": "${self:custom.serviceCode}",
            "JANIS_ENV": "${self:custom.stage}",
            "MS_PATH": "src",
        },
        "tags": {
            "Owner": "Janis",
            "Microservice": "${self:custom.serviceName}",
            "Stack": "${param:humanReadableStage}",
        },
        "versionFunctions": False,
        "apiGateway": {
            "disableDefaultEndpoint": True,
            "minimumCompressionSize": 1024,
        },
        "logs": {
            "restApi": {
                "accessLogging": True,
                "executionLogging": False,
                "level": "INFO",
                "fullExecutionData": False,
                "format": access_log_format(),
            },
        },
    }


def build_stage_params() -> Dict[str, Dict[str, str]]:
    return {
        stage: {"humanReadableStage": readable, "janisDomain": domain}
        for stage, readable, domain in STAGES
    }


def build_package() -> Dict[str, Any]:
    return {
        "individually": False,
        "include": list(DEFAULT_PACKAGE_INCLUDE),
        "exclude": list(DEFAULT_PACKAGE_EXCLUDE),
    }


def build_custom(
    *,
    service_code: str,
    service_name: str,
    service_title: str,
    service_port: int,
) -> Dict[str, Any]:
    return {
        "serviceTitle": service_title,
        "serviceName": service_name,
        "serviceCode": service_code,
        "stage": "${self:provider.stage}",
        "region": "${self:provider.region}",
        "humanReadableStage": {stage: readable for stage, readable, _ in STAGES},
        "janisDomains": {stage: domain for stage, _, domain in STAGES},
        "cacheEnabled": {
            "prod": False,
        },
        "customDomain": {
            "domainName": "${self:custom.serviceCode}.${param:janisDomain}",
            "basePath": "api",
            "stage": "${self:custom.stage}",
            "createRoute53Record": True,
            "endpointType": "regional",
            "securityPolicy": "tls_1_2",
        },
        "apiGatewayCaching": {
            "enabled": "${self:custom.cacheEnabled.${self:custom.stage}, 'false'}",
            "clusterSize": "0.5",
            "ttlInSeconds": 600,  # 10 minutos
        },
        "serverless-offline": {
            "httpPort": service_port,
            "lambdaPort": service_port + OFFLINE_LAMBDA_PORT_OFFSET,
            "host": "0.0.0.0",
            "stage": "local",
            "noPrependStageInUrl": True,
            "prefix": "api",
            "reloadHandler": True,
        },
        "stageVariables": {
            "serviceName": "${self:custom.serviceCode}",
        },
        "reducer": {
            "ignoreMissing": True,
        },
    }


def _logs_policy_resource(log_group: str) -> Dict[str, Any]:
    return {
        "Fn::Join": [
            ":",
            [
                "arn:aws:logs",
                {"Ref": "AWS::Region"},
                {"Ref": "AWS::AccountId"},
                log_group,
            ],
        ]
    }


def build_execution_role(*, vpc_access: bool = False) -> Dict[str, Any]:
    """Role IAM `ServiceExecutionRole` assumida pelas lambdas do serviço.

    Com `vpc_access`, anexa a managed policy de acesso à VPC.
    """
    properties: Dict[str, Any] = {
        "RoleName": "Janis${self:custom.serviceName}Service-${self:custom.stage}-lambdaRole",
        "Path": "/janis-service/",
        "AssumeRolePolicyDocument": {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {
                        "Service": ["lambda.amazonaws.com"],
                    },
                    "Action": "sts:AssumeRole",
                }
            ],
        },
    }

    if vpc_access:
        properties["ManagedPolicyArns"] = [VPC_ACCESS_POLICY_ARN]

    properties["Policies"] = [
        {
            "PolicyName": "janis-${self:custom.serviceCode}-logs-policy",
            "PolicyDocument": {
                "Version": "2012-10-17",
                "Statement": [
                    {
                        "Effect": "Allow",
                        "Action": [
                            "logs:CreateLogGroup",
                            "logs:CreateLogStream",
                            "logs:PutLogEvents",
                        ],
                        "Resource": [
                            _logs_policy_resource("log-group:/aws/lambda/*:*"),
                            _logs_policy_resource("log-group:/aws/lambda/*:*:*"),
                        ],
                    }
                ],
            },
        }
    ]

    return {
        "Type": "AWS::IAM::Role",
        "Properties": properties,
    }


def build_gateway_response(response_type: str, status_code: str, template: str) -> Dict[str, Any]:
    return {
        "Type": "AWS::ApiGateway::GatewayResponse",
        "Properties": {
            "ResponseParameters": {
                "gatewayresponse.header.Access-Control-Allow-Origin": "method.request.header.Origin",
            },
            "ResponseTemplates": {
                "application/json": template,
            },
            "ResponseType": response_type,
            "RestApiId": {
                "Ref": "ApiGatewayRestApi",
            },
            "StatusCode": status_code,
        },
    }


def build_resources(*, vpc_access: bool = False) -> Dict[str, Any]:
    resources: Dict[str, Any] = {
        "ServiceExecutionRole": build_execution_role(vpc_access=vpc_access),
    }
    for name, response_type, status_code, template in GATEWAY_RESPONSES:
        resources[name] = build_gateway_response(response_type, status_code, template)

    return {"Resources": resources}


def build_base_defaults(
    *,
    service_code: str,
    service_name: str,
    service_title: str,
    service_port: int,
    vpc_access: bool = False,
    trace_layers: Sequence[str] = (),
) -> Dict[str, Any]:
    """
    Monta a árvore completa de defaults do hook base.

    Args:
        service_code: código dash-case do serviço (já validado).
        service_name: nome PascalCase derivado do código.
        service_title: título legível derivado do código.
        service_port: porta HTTP local do serverless-offline.
        vpc_access: anexa a policy de acesso à VPC na role de execução.
        trace_layers: ARNs de layers de trace; quando houver, a extensão
            é habilitada via variável de ambiente.

    Returns:
        Dict[str, Any]: Nova árvore de defaults.
    """
    provider = build_provider()
    if trace_layers:
        provider["environment"]["JANIS_TRACE_EXTENSION_ENABLED"] = "true"
        provider["layers"] = list(trace_layers)

    return {
        "service": "Janis${self:custom.serviceName}Service",
        "provider": provider,
        "params": build_stage_params(),
        "package": build_package(),
        "custom": build_custom(
            service_code=service_code,
            service_name=service_name,
            service_title=service_title,
            service_port=service_port,
        ),
        "plugins": list(DEFAULT_PLUGINS),
        "resources": build_resources(vpc_access=vpc_access),
    }
