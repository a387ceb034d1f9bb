import pytest

from ecal.easter import easter_sunday
from ecal.errors import EasterComputationDomainError


@pytest.mark.parametrize("year, expected", [
    (1583, (4, 10)),
    (2008, (3, 23)),
    (2019, (4, 21)),
    (2024, (3, 31)),
    (2025, (4, 20)),
    (2038, (4, 25)),
    (2285, (3, 22)),
])
def test_known_easter_dates(year, expected):
    assert easter_sunday(year) == expected


def test_easter_always_in_march_or_april():
    for year in range(1583, 4100):
        month, day = easter_sunday(year)
        assert (month == 3 and 22 <= day <= 31) or (month == 4 and 1 <= day <= 25)


def test_easter_before_gregorian_reform():
    with pytest.raises(EasterComputationDomainError) as excinfo:
        easter_sunday(1582)
    assert excinfo.value.year == 1582
