"""Tests for vendor frame classification."""

import pytest

from tracetail.classify import VendorFrameClassifier
from tracetail.lines import PhysicalLine


@pytest.fixture
def classifier():
    return VendorFrameClassifier()


@pytest.mark.parametrize(
    "line",
    [
        "#00 /vendor/laravel/framework/src/Illuminate/Pipeline/Pipeline.php(183): Illuminate\\Pipeline\\Pipeline->then()",
        "#4 /var/www/vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): Illuminate\\Container\\Util::unwrapIfClosure()",
        "#42 {main}",
        "#42 {main}   ",
    ],
)
def test_vendor_frames(classifier, line):
    assert classifier.is_vendor_frame(line)
    assert classifier(line)


@pytest.mark.parametrize(
    "line",
    [
        "#01 /app/Http/Controllers/HomeController.php(12): App\\Services\\Thing->run()",
        "#03 /vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): App\\Http\\Controllers\\HomeController->index()",
        "plain text without any path",
    ],
)
def test_application_frames(classifier, line):
    assert not classifier.is_vendor_frame(line)


def test_boundary_frame(classifier):
    """Test the dispatch shim carve-out only applies when calling into App."""
    assert classifier.is_boundary_frame("BoundMethod.php(36): App\\Http\\Controllers\\Foo->bar()")
    assert not classifier.is_boundary_frame("BoundMethod.php(36): Illuminate\\Foo->bar()")


def test_tagged_rows_use_their_tag(classifier):
    """Test rendered rows are classified by their vendor tag alone."""
    assert classifier.is_vendor_frame(PhysicalLine(" │ #…  │ ", is_vendor=True, compressed=3))
    assert not classifier.is_vendor_frame(PhysicalLine(" │ #05 /vendor/foo.php(1): x() │ "))


def test_custom_segment():
    classifier = VendorFrameClassifier(vendor_segment="/site-packages/", boundary_pattern=None)
    assert classifier("#02 /usr/lib/python3/site-packages/requests/api.py(59): request()")
    assert not classifier("#02 /vendor/foo.php(1): bar()")


def test_without_boundary_pattern():
    classifier = VendorFrameClassifier(boundary_pattern=None)
    assert classifier("#03 /vendor/laravel/framework/src/Illuminate/Container/BoundMethod.php(36): App\\Foo->bar()")
