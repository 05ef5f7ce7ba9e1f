import pytest

from bulk_edit.errors import AuthorizationError, NotFoundError, SystemError, ValidationError
from bulk_edit.utils.response_utils import unified_error_response, unified_success_response


@pytest.mark.unit
def test_unified_success_response_shape() -> None:
    payload, status = unified_success_response({"id": 1}, "已保存", status=201, meta={"total": 1})

    assert status == 201
    assert payload["success"] is True
    assert payload["error"] is False
    assert payload["message"] == "已保存"
    assert payload["data"] == {"id": 1}
    assert payload["meta"] == {"total": 1}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "status", "message_code"),
    [
        (ValidationError(message_key="MISSING_REQUIRED_FIELDS"), 400, "MISSING_REQUIRED_FIELDS"),
        (AuthorizationError(message_key="PERMISSION_DENIED"), 403, "PERMISSION_DENIED"),
        (NotFoundError(message_key="CONFIGURATION_NOT_FOUND"), 404, "CONFIGURATION_NOT_FOUND"),
        (SystemError(), 500, "INTERNAL_ERROR"),
        (RuntimeError("boom"), 500, "INTERNAL_ERROR"),
    ],
)
def test_unified_error_response_maps_status(error, status, message_code) -> None:
    payload, resolved_status = unified_error_response(error)

    assert resolved_status == status
    assert payload["success"] is False
    assert payload["error"] is True
    assert payload["message_code"] == message_code
    assert payload["error_id"]


@pytest.mark.unit
def test_unified_error_response_exposes_extra() -> None:
    payload, _ = unified_error_response(NotFoundError(message_key="RECORDS_NOT_FOUND", extra={"missing_ids": [9]}))

    assert payload["extra"] == {"missing_ids": [9]}
    assert payload["recoverable"] is True
