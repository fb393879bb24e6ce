"""Test utilities for geode applications.

    from geode.testing import TestClient, assert_status
"""

from geode.testing.assertions import (
    assert_body_contains,
    assert_body_not_contains,
    assert_status,
)
from geode.testing.client import TestClient

__all__ = [
    "TestClient",
    "assert_body_contains",
    "assert_body_not_contains",
    "assert_status",
]
