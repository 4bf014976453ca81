"""API Response Envelope — defaults, incremental mutation, and camelCase wire format."""

from villa_api.schemas.api_response import APIResponse


def test_defaults_are_an_empty_success():
    assert APIResponse().to_wire() == {
        "isSuccess": True, "statusCode": 200, "result": None, "errorMessages": [],
    }


def test_fail_keeps_existing_result_and_appends_messages():
    response = APIResponse().succeed(200, {"villaNo": 1})
    response.fail(500, "first").fail(500, "second")
    assert response.is_success is False
    assert response.status_code == 500
    assert response.result == {"villaNo": 1}
    assert response.error_messages == ["first", "second"]


def test_succeed_clears_errors():
    response = APIResponse().fail(400, "bad")
    response.succeed(204)
    assert response.is_success is True
    assert response.error_messages == []
    assert response.status_code == 204


def test_default_error_lists_are_not_shared():
    a, b = APIResponse(), APIResponse()
    a.fail(400, "only a")
    assert b.error_messages == []


def test_accepts_wire_names_on_input():
    response = APIResponse.model_validate(
        {"isSuccess": False, "statusCode": 404, "errorMessages": ["missing"]},
    )
    assert response.status_code == 404
    assert response.error_messages == ["missing"]
