import math

import pytest

from player_catalog.domain.pagination import Pagination


@pytest.mark.parametrize("page", [None, 0, -1, -100])
def test_page_defaults_to_one(page):
    assert Pagination(page=page).get_page() == 1


@pytest.mark.parametrize("page_size", [None, 0, -5])
def test_page_size_defaults_to_ten(page_size):
    assert Pagination(page_size=page_size).get_page_size() == 10


def test_custom_default_page_size():
    assert Pagination().get_page_size(default=25) == 25


def test_skip_and_limit():
    p = Pagination(page=3, page_size=20)
    assert p.skip() == 40
    assert p.limit() == 20


def test_unbounded_first_page_returns_everything():
    p = Pagination(page=1, page_size=math.inf)
    assert p.get_page_size() == math.inf
    assert p.is_unbounded()
    assert p.skip() == 0
    assert p.limit() is None


def test_unbounded_later_page_is_past_the_end():
    p = Pagination(page=2, page_size=math.inf)
    assert p.skip() == 0
    assert p.limit() == 0


def test_equality_is_by_value():
    assert Pagination(2, 5) == Pagination(2, 5)
    assert Pagination(2, 5) != Pagination(3, 5)
