import pytest

from bulk_edit.core.host import BundleDescriptor, bundle_descriptors


@pytest.mark.unit
def test_bundle_descriptors_keep_selection_order() -> None:
    descriptors = bundle_descriptors({"node": {"page": "Basic page", "article": None}, "media": {"image": "Image"}})

    assert descriptors == [
        BundleDescriptor("node", "page", "Basic page"),
        BundleDescriptor("node", "article", None),
        BundleDescriptor("media", "image", "Image"),
    ]


@pytest.mark.unit
def test_bundle_descriptors_empty_selection() -> None:
    assert bundle_descriptors({}) == []
