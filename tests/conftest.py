# tests/conftest.py
"""
Fixtures compartilhados para testes do sls-api-base.

Este módulo define fixtures reutilizáveis que fornecem:
- opções válidas para os hooks
- configurações de trace controladas (sem depender do ambiente do processo)
- o descriptor base esperado para o serviço `testing`, escrito de forma
  literal e independente dos módulos de defaults

Decisões arquiteturais:
    - O descriptor esperado é reconstruído a cada uso (fixtures mutáveis
      não vazam entre testes)
    - Variáveis de ambiente de trace são removidas por padrão

Limites explícitos:
    - Não executa hooks
    - Não realiza I/O
"""

import json

import pytest


ACCOUNT_ID = "012345678910"


@pytest.fixture(autouse=True)
def _clean_trace_env(monkeypatch):
    """Garante que nenhum teste herde variáveis de trace do ambiente do processo."""
    monkeypatch.delenv("TRACE_ACCOUNT_ID", raising=False)
    monkeypatch.delenv("JANIS_TRACE_EXTENSION_VERSION", raising=False)


@pytest.fixture
def account_id() -> str:
    return ACCOUNT_ID


@pytest.fixture
def base_options() -> dict:
    return {"serviceCode": "testing", "servicePort": 3000}


@pytest.fixture
def no_trace():
    from sls_api_base.core.trace import TraceSettings

    return TraceSettings()


@pytest.fixture
def trace_settings():
    from sls_api_base.core.trace import TraceSettings

    return TraceSettings(account_id=ACCOUNT_ID, extension_version="1")


def _gateway_response(response_type: str, status_code: str, template: str) -> dict:
    return {
        "Type": "AWS::ApiGateway::GatewayResponse",
        "Properties": {
            "ResponseParameters": {
                "gatewayresponse.header.Access-Control-Allow-Origin": "method.request.header.Origin"
            },
            "ResponseTemplates": {"application/json": template},
            "ResponseType": response_type,
            "RestApiId": {"Ref": "ApiGatewayRestApi"},
            "StatusCode": status_code,
        },
    }


_DETAIL_TEMPLATE = (
    '{"message":$context.error.messageString,'
    '"detail":"$context.authorizer.errorMessage",'
    '"authorizerErrorType":"$context.error.responseType"}'
)


@pytest.fixture
def expected_base_config() -> dict:
    """
    Fixture que fornece o descriptor completo esperado do hook base para
    `{"serviceCode": "testing", "servicePort": 3000}`, sem trace e sem VPC.

    Returns:
        dict: Descriptor esperado (nova instância a cada uso).
    """
    access_log_format = json.dumps(
        {
            "date": "$context.requestTime",
            "reqId": "$context.requestId",
            "integReqId": "$context.integration.requestId",
            "ip": "$context.identity.sourceIp",
            "ua": "$context.identity.userAgent",
            "clientCode": "$context.authorizer.clientCode",
            "principalId": "$context.authorizer.principalId",
            "reqMethod": "$context.httpMethod",
            "path": "$context.resourcePath",
            "realPath": "$context.path",
            "status": "$context.status",
            "authTime": "$context.authorizer.latency",
            "resTime": "$context.responseLatency",
            "gwError": "$context.error.message",
            "integError": "$context.integration.error",
        },
        separators=(",", ":"),
    )

    return {
        "service": "Janis${self:custom.serviceName}Service",
        "provider": {
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
                    "format": access_log_format,
                }
            },
        },
        "params": {
            "local": {"humanReadableStage": "Local", "janisDomain": "janis.localhost"},
            "beta": {"humanReadableStage": "Beta", "janisDomain": "janisdev.in"},
            "qa": {"janisDomain": "janisqa.in", "humanReadableStage": "QA"},
            "prod": {"humanReadableStage": "Prod", "janisDomain": "janis.in"},
        },
        "package": {
            "individually": False,
            "include": ["src/config/*"],
            "exclude": [
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
            ],
        },
        "custom": {
            "serviceTitle": "Testing",
            "serviceName": "Testing",
            "serviceCode": "testing",
            "stage": "${self:provider.stage}",
            "region": "${self:provider.region}",
            "humanReadableStage": {"local": "Local", "beta": "Beta", "qa": "QA", "prod": "Prod"},
            "janisDomains": {
                "local": "janis.localhost",
                "beta": "janisdev.in",
                "qa": "janisqa.in",
                "prod": "janis.in",
            },
            "cacheEnabled": {"prod": False},
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
                "ttlInSeconds": 600,
            },
            "serverless-offline": {
                "httpPort": 3000,
                "lambdaPort": 23000,
                "host": "0.0.0.0",
                "stage": "local",
                "noPrependStageInUrl": True,
                "prefix": "api",
                "reloadHandler": True,
            },
            "stageVariables": {"serviceName": "${self:custom.serviceCode}"},
            "reducer": {"ignoreMissing": True},
        },
        "plugins": [
            "serverless-domain-manager",
            "serverless-offline",
            "serverless-api-gateway-caching",
            "serverless-plugin-stage-variables",
            "@janiscommerce/serverless-plugin-remove-authorizer-permissions",
            "serverless-plugin-split-stacks",
        ],
        "resources": {
            "Resources": {
                "ServiceExecutionRole": {
                    "Type": "AWS::IAM::Role",
                    "Properties": {
                        "RoleName": "Janis${self:custom.serviceName}Service-${self:custom.stage}-lambdaRole",
                        "Path": "/janis-service/",
                        "AssumeRolePolicyDocument": {
                            "Version": "2012-10-17",
                            "Statement": [
                                {
                                    "Effect": "Allow",
                                    "Principal": {"Service": ["lambda.amazonaws.com"]},
                                    "Action": "sts:AssumeRole",
                                }
                            ],
                        },
                        "Policies": [
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
                                                {
                                                    "Fn::Join": [
                                                        ":",
                                                        [
                                                            "arn:aws:logs",
                                                            {"Ref": "AWS::Region"},
                                                            {"Ref": "AWS::AccountId"},
                                                            "log-group:/aws/lambda/*:*",
                                                        ],
                                                    ]
                                                },
                                                {
                                                    "Fn::Join": [
                                                        ":",
                                                        [
                                                            "arn:aws:logs",
                                                            {"Ref": "AWS::Region"},
                                                            {"Ref": "AWS::AccountId"},
                                                            "log-group:/aws/lambda/*:*:*",
                                                        ],
                                                    ]
                                                },
                                            ],
                                        }
                                    ],
                                },
                            }
                        ],
                    },
                },
                "UnauthorizedResponse": _gateway_response(
                    "UNAUTHORIZED",
                    "401",
                    '{"message":$context.error.messageString,"authorizerErrorType":"$context.error.responseType"}',
                ),
                "BadRequestBodyResponse": _gateway_response("BAD_REQUEST_BODY", "400", _DETAIL_TEMPLATE),
                "BadRequestParameters": _gateway_response("BAD_REQUEST_PARAMETERS", "400", _DETAIL_TEMPLATE),
                "AccessDeniedResponse": _gateway_response("ACCESS_DENIED", "403", _DETAIL_TEMPLATE),
                "AuthorizerConfigurationErrorResponse": _gateway_response(
                    "AUTHORIZER_CONFIGURATION_ERROR", "500", _DETAIL_TEMPLATE
                ),
                "AuthorizerFailureResponse": _gateway_response("AUTHORIZER_FAILURE", "500", _DETAIL_TEMPLATE),
                "IntegrationTimeoutResponse": _gateway_response(
                    "INTEGRATION_TIMEOUT",
                    "504",
                    '{"message":"Timeout","authorizerErrorType":"$context.error.responseType"}',
                ),
            }
        },
    }


@pytest.fixture
def expected_authorizers() -> dict:
    """Tabela `custom.authorizers` esperada para ACCOUNT_ID."""
    prefix = f"arn:aws:lambda:us-east-1:{ACCOUNT_ID}:function:JanisAuthorizerService-${{self:custom.stage}}-"
    h = "method.request.header."
    key_secret = f"{h}janis-api-key,{h}janis-api-secret"
    full = f"{h}janis-client,{key_secret}"

    def entry(name, function_name, identity_source):
        return {
            "name": name,
            "arn": prefix + function_name,
            "resultTtlInSeconds": 300,
            "identitySource": identity_source,
            "type": "request",
        }

    return {
        "FullAuthorizer": entry("FullAuthorizer", "FullAuthorizer", full),
        "NoClientAuthorizer": entry("NoClientAuthorizer", "NoClientAuthorizer", key_secret),
        "LoggedAuthorizer": entry("LoggedAuthorizer", "LoggedAuthorizer", key_secret),
        "ApiKeyAuthorizer": entry("ApiKeyAuthorizer", "ApiKeyAuthorizer", key_secret),
        "UserAuthorizer": entry("UserAuthorizer", "UserAuthorizer", key_secret),
        "DevUserAuthorizer": entry("DevUserAuthorizer", "DevUserAuthorizer", key_secret),
        "ServiceAuthorizer": entry("ServiceAuthorizer", "ServiceAuthorizer", full),
        "ServiceNoClientAuthorizer": entry("ServiceNoClientAuthorizer", "ServiceAuthorizer", key_secret),
        "ClientAuthorizer": entry("ClientAuthorizer", "ClientAuthorizer", f"{h}janis-client"),
        "ImportExportAuthorizer": entry(
            "ImportExportAuthorizer", "ImportExportAuthorizer", f"{key_secret},{h}janis-entity"
        ),
        "ImportAuthorizer": entry(
            "ImportAuthorizer", "ImportAuthorizer", f"{key_secret},{h}janis-service,{h}janis-entity"
        ),
        "ExportAuthorizer": entry("ExportAuthorizer", "ExportAuthorizer", f"{key_secret},{h}janis-entity"),
    }
