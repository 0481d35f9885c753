import uuid

import pytest

from tenderbid.models.enums import BidDecision, TenderStatus
from tenderbid.services.errors import ErrorKind, InvalidIdentifier, InvalidPagination, InvalidStatus, InvalidVersion
from tenderbid.services.validators import check_page, check_version, is_blank, parse_id, parse_status


def test_parse_id():
    value = uuid.uuid4()

    assert parse_id(value) is value
    assert parse_id(str(value)) == value
    for bad in ("", "123", "not-a-uuid"):
        with pytest.raises(InvalidIdentifier):
            parse_id(bad, "tenderId")


def test_parse_status():
    assert parse_status("Published", TenderStatus) is TenderStatus.PUBLISHED
    assert parse_status(BidDecision.REJECTED, BidDecision) is BidDecision.REJECTED
    with pytest.raises(InvalidStatus) as exc_info:
        parse_status("published", TenderStatus)
    assert exc_info.value.kind is ErrorKind.VALIDATION


@pytest.mark.parametrize("version", [0, -3, True, "2"])
def test_check_version_rejects(version):
    with pytest.raises(InvalidVersion):
        check_version(version)


def test_check_page():
    check_page(0, 0)
    with pytest.raises(InvalidPagination):
        check_page(5, -1)


def test_is_blank():
    assert is_blank(None)
    assert is_blank("")
    assert not is_blank(" ")


def test_numeric_upper_bounds():
    assert check_version(2**31 - 1) == 2**31 - 1
    with pytest.raises(InvalidVersion):
        check_version(2**31)
    check_page(2**63 - 1, 2**63 - 1)
    with pytest.raises(InvalidPagination):
        check_page(5, 2**63)
