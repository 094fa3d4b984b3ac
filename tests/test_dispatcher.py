"""Tests for the request dispatcher: gate, normalization, retry, failure mapping."""

from __future__ import annotations

import httpx
import pytest
from pydantic import BaseModel

from envelope_client.core import DecoderRegistry
from envelope_client.core.errors import (
    GENERIC_MESSAGE,
    INVALID_FORMAT_MESSAGE,
    NO_INTERNET_MESSAGE,
    TIMEOUT_MESSAGE,
)
from envelope_client.models import ErrorDetail, Failure, Meta, ResponseEnvelope, Success
from tests.helpers import envelope_response, request_json


class Item(BaseModel):
    x: int


PAGINATED_BODY = {
    "data": {
        "result": [{"x": 1}, {"x": 2}],
        "meta": {
            "total": 2,
            "page": 1,
            "limit": 2,
            "totalPages": 1,
            "hasNextPage": False,
            "hasPreviousPage": False,
        },
    },
    "success": True,
    "statusCode": 200,
}


@pytest.mark.asyncio
async def test_offline_returns_no_internet_without_transport_call(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=200), online=False)

    result = await service.get("/users")

    assert isinstance(result, Failure)
    assert result.error == ErrorDetail(status_code=0, message=NO_INTERNET_MESSAGE)
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_auth_expiry_retries_three_times_then_bare_401(make_service) -> None:
    refreshes: list[int] = []

    async def refresh() -> None:
        refreshes.append(1)

    service, transport = make_service(
        lambda request: envelope_response(401, statusCode=401, message="jwt expired"),
        token_refresher=refresh,
    )

    result = await service.get("/me")

    assert isinstance(result, Failure)
    assert result.error.status_code == 401
    assert result.error.message is None
    assert transport.calls == 4
    assert len(refreshes) == 3


@pytest.mark.asyncio
async def test_retry_picks_up_refreshed_token(make_service) -> None:
    tokens = iter(["stale", "fresh"])
    current = {"token": next(tokens)}

    def handler(request: httpx.Request) -> httpx.Response:
        if request.headers["Authorization"] == "Bearer stale":
            return envelope_response(401, statusCode=401)
        return envelope_response(statusCode=200, data={"id": 1})

    service, transport = make_service(
        handler,
        token_supplier=lambda: current["token"],
        token_refresher=lambda: current.update(token=next(tokens)),
    )

    result = await service.get("/me")

    assert result == Success(value={"id": 1})
    assert transport.calls == 2


@pytest.mark.asyncio
async def test_full_envelope_with_pagination(make_service) -> None:
    registry = DecoderRegistry()
    registry.register_model(Item)
    service, _ = make_service(lambda request: httpx.Response(200, json=PAGINATED_BODY), registry=registry)

    result = await service.get("/items", full_envelope=True, decode_as=Item)

    assert isinstance(result, Success)
    envelope = result.value
    assert isinstance(envelope, ResponseEnvelope)
    assert envelope.payload == [Item(x=1), Item(x=2)]
    assert isinstance(envelope.meta, Meta)
    assert envelope.meta.total == 2


@pytest.mark.asyncio
async def test_payload_only_by_default(make_service) -> None:
    service, _ = make_service(lambda request: httpx.Response(200, json=PAGINATED_BODY))

    result = await service.get("/items")

    assert result == Success(value=[{"x": 1}, {"x": 2}])


@pytest.mark.asyncio
async def test_server_error_decoded_from_raw_body(make_service) -> None:
    body = {
        "statusCode": 422,
        "message": ["email must be an email", "name should not be empty"],
        "error": "Unprocessable Entity",
        "data": {"field": "email"},
    }
    service, _ = make_service(lambda request: httpx.Response(422, json=body))

    result = await service.post("/users", {"email": "nope"})

    assert result == Failure(
        error=ErrorDetail(
            status_code=422,
            message="email must be an email, name should not be empty",
            error_tag="Unprocessable Entity",
            data={"field": "email"},
        )
    )


@pytest.mark.asyncio
async def test_headers_merge_with_caller_winning(make_service) -> None:
    service, transport = make_service(
        lambda request: envelope_response(statusCode=200),
        token_supplier=lambda: "abc",
        language_supplier=lambda: "de",
    )

    await service.get("/ping", headers={"Accept-Language": "fr", "X-Trace": "1"})

    sent = transport.requests[0].headers
    assert sent["Content-Type"] == "application/json"
    assert sent["Authorization"] == "Bearer abc"
    assert sent["Accept-Language"] == "fr"
    assert sent["X-Trace"] == "1"


@pytest.mark.asyncio
async def test_default_language_and_no_token(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=200), token_supplier=lambda: "")

    await service.get("/ping")

    sent = transport.requests[0].headers
    assert sent["Accept-Language"] == "en"
    assert "Authorization" not in sent


@pytest.mark.asyncio
async def test_absent_query_values_are_omitted(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=200))

    await service.get("/users", query={"page": 1, "search": None, "role": ""})

    params = transport.requests[0].url.params
    assert params["page"] == "1"
    assert params["role"] == ""
    assert "search" not in params


@pytest.mark.asyncio
async def test_write_verbs_send_json_body(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=200))

    await service.put("/users/1", {"name": "Ada"})
    await service.patch("/users/1", Item(x=5))
    await service.delete("/users/1", body={"reason": "spam"})

    methods = [request.method for request in transport.requests]
    assert methods == ["PUT", "PATCH", "DELETE"]
    assert [request_json(request) for request in transport.requests] == [
        {"name": "Ada"},
        {"x": 5},
        {"reason": "spam"},
    ]


@pytest.mark.asyncio
async def test_invalid_json_maps_to_500(make_service) -> None:
    service, _ = make_service(lambda request: httpx.Response(502, text="<html>Bad Gateway</html>"))

    result = await service.get("/users")

    assert result == Failure(error=ErrorDetail(status_code=500, message=INVALID_FORMAT_MESSAGE))


@pytest.mark.asyncio
async def test_non_object_json_maps_to_500(make_service) -> None:
    service, _ = make_service(lambda request: httpx.Response(200, json=[1, 2, 3]))

    result = await service.get("/users")

    assert isinstance(result, Failure)
    assert result.error.status_code == 500


@pytest.mark.asyncio
async def test_timeout_maps_to_408(make_service) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    service, _ = make_service(handler)

    result = await service.get("/slow")

    assert result == Failure(error=ErrorDetail(status_code=408, message=TIMEOUT_MESSAGE))


@pytest.mark.asyncio
async def test_connect_error_pattern_matched(make_service) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("[Errno 104] Connection reset by peer", request=request)

    service, _ = make_service(handler)

    result = await service.get("/users")

    assert isinstance(result, Failure)
    assert result.error.status_code == 0
    assert result.error.message.startswith("Connection lost.")


@pytest.mark.asyncio
async def test_refresher_failure_is_generic_error(make_service) -> None:
    def refresh() -> None:
        raise RuntimeError("refresh endpoint down")

    service, _ = make_service(
        lambda request: envelope_response(401, statusCode=401),
        token_refresher=refresh,
    )

    result = await service.get("/me")

    assert result == Failure(error=ErrorDetail(status_code=0, message=GENERIC_MESSAGE))


@pytest.mark.asyncio
async def test_loading_indicator_toggled(make_service) -> None:
    events: list[bool] = []
    service, _ = make_service(lambda request: envelope_response(statusCode=200), loading_indicator=events.append)

    await service.get("/ping", show_loader=True)
    await service.get("/ping")

    assert events == [True, False]


@pytest.mark.asyncio
async def test_unknown_method_is_generic_failure_without_transport_call(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=200))

    result = await service.dispatch("TRACE", "/ping")

    assert result == Failure(error=ErrorDetail(status_code=0, message=GENERIC_MESSAGE))
    assert transport.calls == 0


@pytest.mark.asyncio
async def test_lowercase_caller_headers_replace_base_headers(make_service) -> None:
    service, transport = make_service(
        lambda request: envelope_response(statusCode=200),
        token_supplier=lambda: "abc",
    )

    await service.get("/ping", headers={"authorization": "Bearer caller", "content-type": "text/plain"})

    sent = transport.requests[0].headers
    assert sent.get_list("Authorization") == ["Bearer caller"]
    assert sent.get_list("Content-Type") == ["text/plain"]


@pytest.mark.asyncio
async def test_fields_only_upload_is_multipart(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=201))

    result = await service.post_multipart("/uploads", {"title": "x", "n": 2})

    request = transport.requests[0]
    assert isinstance(result, Success)
    assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert b'name="title"\r\n\r\nx\r\n' in request.content
    assert b'name="n"\r\n\r\n2\r\n' in request.content
    assert b"filename=" not in request.content


@pytest.mark.asyncio
async def test_zero_retry_budget_returns_401_immediately(make_service) -> None:
    service, transport = make_service(lambda request: envelope_response(statusCode=401), max_auth_retries=0)

    result = await service.get("/me")

    assert result == Failure(error=ErrorDetail(status_code=401))
    assert transport.calls == 1
