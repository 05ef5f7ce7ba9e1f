import pytest

from bulk_edit.services.bulk_edit.configuration import BulkEditConfiguration


@pytest.mark.unit
def test_configuration_from_dict_skips_malformed_entries() -> None:
    configuration = BulkEditConfiguration.from_dict(
        {
            "node": {"page": {"title": [{"value": "T"}]}, "broken": "nope"},
            "user": "nope",
            "_add_values": True,
        },
    )

    assert configuration.add_values is True
    assert configuration.bundle_values("node", "page") == {"title": [{"value": "T"}]}
    assert configuration.bundle_values("node", "broken") is None
    assert configuration.bundle_values("user", "user") is None


@pytest.mark.unit
def test_configuration_preserves_field_insertion_order() -> None:
    configuration = BulkEditConfiguration()
    configuration.set_field_value("node", "page", "title", [{"value": "T"}])
    configuration.set_field_value("node", "page", "body", [{"value": "B"}])

    restored = BulkEditConfiguration.from_dict(configuration.to_dict())

    assert list(restored.bundle_values("node", "page") or {}) == ["title", "body"]
    assert BulkEditConfiguration.from_dict(None).is_empty
