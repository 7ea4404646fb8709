"""
Data model definitions package.

Aggregates Pydantic models of the invocation events the mapper reads.
"""

from .aws_v1 import APIGatewayProxyEventV1, CognitoAuthorizer, RequestContextV1
from .aws_v2 import (
    APIGatewayProxyEventV2,
    AuthorizerV2,
    JwtAuthorizer,
    RequestContextHttp,
    RequestContextV2,
)

__all__ = [
    "APIGatewayProxyEventV1",
    "CognitoAuthorizer",
    "RequestContextV1",
    "APIGatewayProxyEventV2",
    "AuthorizerV2",
    "JwtAuthorizer",
    "RequestContextHttp",
    "RequestContextV2",
]
