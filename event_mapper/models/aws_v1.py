# event_mapper/models/aws_v1.py

"""
Pydantic models for the parts of an API Gateway REST API (v1) event the
mapper reads.

REST APIs with a Cognito user pool authorizer put the caller's claims at
requestContext.authorizer.claims instead of the HTTP API location
requestContext.authorizer.jwt.claims. Everything else a v1 event carries
(resource, httpMethod, multi-value maps, identity) is passed through
untouched by extraction and is not modelled here.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CognitoAuthorizer(BaseModel):
    """Cognito user pool authorizer output."""

    claims: Dict[str, Any] = Field(default_factory=dict)


class RequestContextV1(BaseModel):
    """REST API Request Context, reduced to the authorizer."""

    requestId: str
    authorizer: Optional[CognitoAuthorizer] = None

    model_config = ConfigDict(extra="allow")


class APIGatewayProxyEventV1(BaseModel):
    """
    REST API (v1) Event, reduced to the containers extraction reads

    queryStringParameters and pathParameters are null when the request has
    none; extraction treats null containers as absent. Unmodelled v1 fields
    are kept as extras so a dumped event still round-trips.
    """

    queryStringParameters: Optional[Dict[str, str]] = None
    pathParameters: Optional[Dict[str, str]] = None
    requestContext: RequestContextV1
    body: Optional[str] = None
    isBase64Encoded: bool = False

    model_config = ConfigDict(extra="allow")

    @property
    def is_authenticated(self) -> bool:
        return self.requestContext.authorizer is not None
