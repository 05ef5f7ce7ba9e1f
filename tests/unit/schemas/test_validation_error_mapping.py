import pytest
from pydantic import field_validator

from bulk_edit.errors import ValidationError
from bulk_edit.schemas.base import PayloadSchema
from bulk_edit.schemas.validation import SchemaMessageKeyError, validate_or_raise


class _BundleSchema(PayloadSchema):
    bundle: str

    @field_validator("bundle")
    @classmethod
    def _validate_bundle(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("bundle 不能为空")
        return value


class _CardinalitySchema(PayloadSchema):
    cardinality: int

    @field_validator("cardinality")
    @classmethod
    def _validate_cardinality(cls, value: int) -> int:
        raise SchemaMessageKeyError("基数不合法", message_key="INVALID_CARDINALITY")


@pytest.mark.unit
def test_validate_or_raise_uses_original_value_error_message() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(_BundleSchema, {"bundle": "   "})

    assert str(excinfo.value) == "bundle 不能为空"
    assert excinfo.value.extra == {"field": "bundle"}


@pytest.mark.unit
def test_validate_or_raise_maps_message_key_by_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(
            _BundleSchema,
            {"bundle": "   "},
            message_key_by_field={"bundle": "INVALID_BUNDLE"},
        )

    assert excinfo.value.message_key == "INVALID_BUNDLE"


@pytest.mark.unit
def test_validate_or_raise_respects_schema_message_key() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(_CardinalitySchema, {"cardinality": 0})

    assert str(excinfo.value) == "基数不合法"
    assert excinfo.value.message_key == "INVALID_CARDINALITY"


@pytest.mark.unit
def test_validate_or_raise_falls_back_to_default_message_key() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(_BundleSchema, {}, message_key="INVALID_REQUEST")

    assert excinfo.value.message_key == "INVALID_REQUEST"
    assert excinfo.value.extra == {"field": "bundle"}
