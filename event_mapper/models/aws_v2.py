# event_mapper/models/aws_v2.py

"""
Pydantic models for AWS API Gateway HTTP API (payload format 2.0) events.

Reference: https://docs.aws.amazon.com/apigateway/latest/developerguide/http-api-develop-integrations-lambda.html

Build events in a type-safe manner and hand them to extract(), which dumps
them with model_dump(by_alias=True, exclude_none=True).
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

ClaimValue = Union[str, int, float, bool, List[str]]


class RequestContextHttp(BaseModel):
    """HTTP request description."""

    method: str
    path: str
    protocol: str = "HTTP/1.1"
    sourceIp: str = "127.0.0.1"
    userAgent: Optional[str] = None


class JwtAuthorizer(BaseModel):
    """JWT authorizer output."""

    claims: Dict[str, ClaimValue] = Field(default_factory=dict)
    scopes: Optional[List[str]] = None


class AuthorizerV2(BaseModel):
    """Authorizer object. Present only for authenticated invocations."""

    jwt: JwtAuthorizer


class RequestContextV2(BaseModel):
    """HTTP API Request Context object."""

    accountId: str = "123456789012"
    apiId: str = "api-id"
    authorizer: Optional[AuthorizerV2] = None
    domainName: str = "localhost"
    domainPrefix: str = "localhost"
    http: RequestContextHttp
    requestId: str
    routeKey: str = "$default"
    stage: str = "$default"
    time: Optional[str] = None
    timeEpoch: Optional[int] = None


class APIGatewayProxyEventV2(BaseModel):
    """
    AWS API Gateway HTTP API (v2) Event Structure

    Defines the structure of the event object received by Lambda functions.
    """

    version: str = "2.0"
    routeKey: str = "$default"
    rawPath: str
    rawQueryString: str = ""
    cookies: Optional[List[str]] = None
    headers: Dict[str, str] = Field(default_factory=dict)
    queryStringParameters: Optional[Dict[str, str]] = None
    pathParameters: Optional[Dict[str, str]] = None
    stageVariables: Optional[Dict[str, str]] = None
    requestContext: RequestContextV2
    body: Optional[str] = None
    isBase64Encoded: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.requestContext.authorizer is not None
