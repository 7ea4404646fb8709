import base64
import json
from unittest.mock import patch

import pytest

from event_mapper.core.binding import FromBody, FromJwtClaims, FromParams, FromQuery
from event_mapper.core.exceptions import MalformedBodyError
from event_mapper.core.paths import MISSING
from event_mapper.core.resolvers import (
    ParsedBody,
    get_claims,
    resolve,
    resolve_body,
    resolve_claims,
    resolve_path,
    resolve_query,
)
from event_mapper.models.aws_v1 import (
    APIGatewayProxyEventV1,
    CognitoAuthorizer,
    RequestContextV1,
)

from event_mapper.tests.events import create_event_v2


class TestBodyResolver:
    def test_whole_body_without_path(self):
        event = create_event_v2(body={"x": 1, "y": {"z": True}})
        assert resolve_body(event) == {"x": 1, "y": {"z": True}}

    def test_empty_path_means_whole_body(self):
        event = create_event_v2(body={"x": 1})
        assert resolve_body(event, "") == {"x": 1}

    def test_dotted_lookup(self):
        event = create_event_v2(body={"a": {"b": "v"}})
        assert resolve_body(event, "a.b") == "v"
        assert resolve_body(event, "a.c") is MISSING

    @pytest.mark.parametrize("body", [None, ""])
    def test_absent_or_empty_body_is_not_parsed(self, body):
        event = create_event_v2(raw_body=body)
        with patch("event_mapper.core.resolvers.json.loads") as loads:
            assert resolve_body(event) is MISSING
            assert resolve_body(event, "a") is MISSING
        loads.assert_not_called()

    def test_malformed_body_raises(self):
        event = create_event_v2(raw_body="not-json")
        with pytest.raises(MalformedBodyError) as exc_info:
            resolve_body(event)
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)

    def test_json_null_body_is_a_value(self):
        event = create_event_v2(raw_body="null")
        assert resolve_body(event) is None

    def test_base64_encoded_body(self):
        event = create_event_v2(raw_body=base64.b64encode(b'{"k": "v"}').decode())
        event["isBase64Encoded"] = True
        assert resolve_body(event, "k") == "v"

    def test_base64_decoding_can_be_disabled(self):
        event = create_event_v2(raw_body=base64.b64encode(b'{"k": "v"}').decode())
        event["isBase64Encoded"] = True
        with pytest.raises(MalformedBodyError):
            ParsedBody(event, decode_base64=False).get()

    def test_invalid_base64_raises(self):
        event = create_event_v2(raw_body="!!not base64!!")
        event["isBase64Encoded"] = True
        with pytest.raises(MalformedBodyError):
            resolve_body(event)

    def test_non_ascii_base64_body_raises(self):
        event = {"body": "h\u00e9llo", "isBase64Encoded": True}
        with pytest.raises(MalformedBodyError) as exc_info:
            resolve_body(event)
        assert isinstance(exc_info.value.cause, ValueError)

    def test_base64_body_with_invalid_utf8_raises(self):
        event = {"body": base64.b64encode(b"\xff\xfe").decode(), "isBase64Encoded": True}
        with pytest.raises(MalformedBodyError) as exc_info:
            resolve_body(event)
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)


class TestParsedBody:
    def test_memoized_body_parses_once(self):
        event = create_event_v2(body={"a": 1})
        body = ParsedBody(event, memoize=True)
        with patch("event_mapper.core.resolvers.json.loads", wraps=json.loads) as loads:
            assert body.get() == {"a": 1}
            assert body.get() == {"a": 1}
        assert loads.call_count == 1

    def test_unmemoized_body_parses_every_time(self):
        event = create_event_v2(body={"a": 1})
        body = ParsedBody(event, memoize=False)
        with patch("event_mapper.core.resolvers.json.loads", wraps=json.loads) as loads:
            assert body.get() == {"a": 1}
            assert body.get() == {"a": 1}
        assert loads.call_count == 2

    def test_memoized_absent_body(self):
        body = ParsedBody(create_event_v2(), memoize=True)
        assert body.get() is MISSING
        assert body.get() is MISSING


class TestQueryAndPathResolvers:
    def test_query_whole_and_named(self):
        event = create_event_v2(query={"take": "2", "skip": "5"})
        assert resolve_query(event) == {"take": "2", "skip": "5"}
        assert resolve_query(event, "take") == "2"
        assert resolve_query(event, "limit") is MISSING

    def test_query_literal_dotted_key(self):
        event = create_event_v2(query={"filter.name": "bob"})
        assert resolve_query(event, "filter.name") == "bob"

    def test_absent_query(self):
        event = create_event_v2()
        assert "queryStringParameters" not in event
        assert resolve_query(event) is MISSING
        assert resolve_query(event, "take") is MISSING

    def test_null_query_container(self):
        event = create_event_v2()
        event["queryStringParameters"] = None
        assert resolve_query(event) is MISSING

    def test_path_params(self):
        event = create_event_v2(params={"orderId": "54321"})
        assert resolve_path(event) == {"orderId": "54321"}
        assert resolve_path(event, "orderId") == "54321"
        assert resolve_path(event, "userId") is MISSING
        assert resolve_path(create_event_v2(), "orderId") is MISSING


class TestClaimsResolver:
    def test_v2_jwt_claims(self):
        event = create_event_v2(claims={"uid": "12345", "groups": ["a", "b"]})
        assert resolve_claims(event) == {"uid": "12345", "groups": ["a", "b"]}
        assert resolve_claims(event, "uid") == "12345"
        assert resolve_claims(event, "email") is MISSING

    def test_unauthenticated_event_ignores_path(self):
        event = create_event_v2(query={"uid": "spoofed"})
        assert resolve_claims(event) is MISSING
        assert resolve_claims(event, "uid") is MISSING

    def test_event_without_request_context(self):
        assert get_claims({"body": "{}"}) is MISSING

    def test_v1_cognito_claims(self):
        event = APIGatewayProxyEventV1(
            pathParameters={"id": "1"},
            requestContext=RequestContextV1(
                requestId="req-1",
                authorizer=CognitoAuthorizer(claims={"cognito:username": "alice"}),
            ),
        ).model_dump(by_alias=True, exclude_none=True)
        assert resolve_claims(event, "cognito:username") == "alice"


class TestResolveDispatch:
    def test_dispatch_by_source(self):
        event = create_event_v2(
            body={"b": 1}, query={"q": "2"}, params={"p": "3"}, claims={"c": "4"}
        )
        assert resolve(event, FromBody("b")) == 1
        assert resolve(event, FromQuery("q")) == "2"
        assert resolve(event, FromParams("p")) == "3"
        assert resolve(event, FromJwtClaims("c")) == "4"

    def test_dispatch_shares_parsed_body(self):
        event = create_event_v2(body={"a": 1, "b": 2})
        body = ParsedBody(event)
        with patch("event_mapper.core.resolvers.json.loads", wraps=json.loads) as loads:
            assert resolve(event, FromBody("a"), body) == 1
            assert resolve(event, FromBody("b"), body) == 2
        assert loads.call_count == 1
