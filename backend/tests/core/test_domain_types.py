"""Domain Types — verifies villa-number parsing and enum values.

Tests:
    - Path ids below 1 parse to None (no magic zero)
    - Positive ids parse to VillaNo
    - ApiVersion maps to its URL segment
"""

import pytest

from villa_api.core.domain_types import ApiVersion, Role, VillaNo, parse_villa_no


@pytest.mark.parametrize("raw", [0, -1, None])
def test_invalid_path_ids_parse_to_none(raw):
    assert parse_villa_no(raw) is None


def test_positive_id_parses_to_villa_no():
    assert parse_villa_no(101) == VillaNo(101)


def test_api_version_path_segments():
    assert ApiVersion.V1.path_segment == "v1"
    assert ApiVersion.V2.path_segment == "v2"


def test_roles_serialize_to_string():
    assert Role.ADMIN.value == "admin"
    assert Role("customer") is Role.CUSTOMER
