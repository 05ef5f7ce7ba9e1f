import pytest

from bulk_edit.errors import ValidationError
from bulk_edit.schemas.bulk_edit import BulkEditConfigurePayload, BulkEditRecordsPayload
from bulk_edit.schemas.validation import validate_or_raise


@pytest.mark.unit
def test_records_payload_deduplicates_and_keeps_order() -> None:
    parsed = validate_or_raise(BulkEditRecordsPayload, {"record_ids": ["3", 1, 3, 2]})

    assert parsed.record_ids == [3, 1, 2]


@pytest.mark.unit
def test_records_payload_rejects_empty_ids() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_or_raise(BulkEditRecordsPayload, {"record_ids": []})

    assert exc_info.value.message_key == "MISSING_REQUIRED_FIELDS"


@pytest.mark.unit
def test_records_payload_rejects_non_integer_ids() -> None:
    with pytest.raises(ValidationError) as exc_info:
        validate_or_raise(BulkEditRecordsPayload, {"record_ids": ["abc"]})

    assert exc_info.value.message_key == "VALIDATION_ERROR"


@pytest.mark.unit
def test_configure_payload_defaults_values() -> None:
    parsed = validate_or_raise(BulkEditConfigurePayload, {"record_ids": [1], "values": None, "unknown": 1})

    assert parsed.values == {}

    with pytest.raises(ValidationError):
        validate_or_raise(BulkEditConfigurePayload, {"record_ids": [1], "values": ["x"]})
