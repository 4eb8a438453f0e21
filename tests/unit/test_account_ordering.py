from src.wl_account.domain.ordering import display_sort_key


def test_numeric_order_not_lexicographic() -> None:
    names = ["Test User 10", "Test User 2", "Test User 1"]
    assert sorted(names, key=display_sort_key) == ["Test User 1", "Test User 2", "Test User 10"]


def test_names_without_number_sort_last_by_name() -> None:
    names = ["zed", "user3", "alice"]
    assert sorted(names, key=display_sort_key) == ["user3", "alice", "zed"]


def test_tie_on_number_breaks_by_name() -> None:
    names = ["b1", "a1"]
    assert sorted(names, key=display_sort_key) == ["a1", "b1"]
