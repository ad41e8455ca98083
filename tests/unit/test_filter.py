import pytest

from player_catalog.common.constants import UpdateStatus
from player_catalog.domain.filter import Between, BirthYearRange, Equals, Filter


def test_empty_filter_only_selects_trusted_records():
    f = Filter()
    assert f.clauses() == [Equals("updateStatus", "UPDATED")]
    assert f.to_predicate() == {"updateStatus": "UPDATED"}


def test_goalkeepers_born_1992_to_2000():
    f = Filter(position="Goalkeeper", birth_year_range=BirthYearRange(1992, 2000))
    assert f.to_predicate() == {
        "updateStatus": "UPDATED",
        "position": "Goalkeeper",
        "dateOfBirth": {"gte": "1992-01-01", "lte": "2000-12-31"},
    }


def test_clause_order_is_stable():
    f = Filter(
        position="Centre-Back",
        is_active=False,
        club_id="5",
        birth_year_range=BirthYearRange(1990, 1995),
    )
    fields = [c.field for c in f.clauses()]
    assert fields == ["updateStatus", "position", "isActive", "clubId", "dateOfBirth"]


def test_is_active_false_is_still_a_clause():
    assert Equals("isActive", False) in Filter(is_active=False).clauses()


@pytest.mark.parametrize(
    "year_range, expected",
    [
        (BirthYearRange(start=1992), Between("dateOfBirth", gte="1992-01-01")),
        (BirthYearRange(end=2000), Between("dateOfBirth", lte="2000-12-31")),
    ],
)
def test_half_open_birth_year_range(year_range, expected):
    assert Filter(birth_year_range=year_range).clauses()[-1] == expected


@pytest.mark.parametrize("year_range", [BirthYearRange(), BirthYearRange(0, -3), BirthYearRange("x", None)])
def test_empty_or_invalid_range_adds_no_clause(year_range):
    assert Filter(birth_year_range=year_range).clauses() == [Equals("updateStatus", "UPDATED")]


def test_update_status_is_normalized():
    assert Filter(update_status="to_update").update_status is UpdateStatus.TO_UPDATE
    assert Filter(update_status=None).update_status is UpdateStatus.UPDATED
    with pytest.raises(ValueError):
        Filter(update_status="STALE")


def test_birth_year_range_from_string():
    assert BirthYearRange.from_string("1992-2000") == BirthYearRange(1992, 2000)
    for bad in ("1992", "92-2000", "1992-2000-1", "abcd-efgh", ""):
        with pytest.raises(ValueError):
            BirthYearRange.from_string(bad)


def test_filter_equality_is_by_value():
    assert Filter(position="Goalkeeper") == Filter(position="Goalkeeper")
    assert Filter(position="Goalkeeper") != Filter(position="Centre-Back")
