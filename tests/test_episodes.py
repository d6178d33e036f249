from anime_renamer.core.episodes import episode_range, episode_numbers, representative_episode
from anime_renamer.core.normalizers import norm_episode


def _eps(*specs):
    return [norm_episode({"id": i, "anime_id": aid, "number": n, "type": t})
            for i, (aid, t, n) in enumerate(specs)]


def test_run_is_merged_with_padding():
    assert episode_range([("Special", 1), ("Special", 2), ("Special", 3)], 2) == "S01-03"


def test_isolated_numbers_are_separate_tokens():
    assert episode_range([("Special", 1), ("Special", 3)], 2) == "S01 S03"
    assert episode_range([("Episode", 5)], 2) == "05"


def test_run_then_gap():
    assert episode_range([("Episode", 5), ("Episode", 1), ("Episode", 2)], 2) == "01-02 05"


def test_types_in_episode_type_order():
    eps = [("Other", 1), ("Special", 2), ("Episode", 3), ("Episode", 4), ("Credits", 1)]
    assert episode_range(eps, 2) == "03-04 C01 S02 O01"


def test_empty_is_empty_string():
    assert episode_range([], 2) == ""


def test_no_padding():
    assert episode_range([("Episode", 9), ("Episode", 10), ("Episode", 11)], 0) == "9-11"


def test_episode_numbers_only_primary_anime():
    eps = _eps((100, "Episode", 1), (100, "Episode", 2), (200, "Episode", 3))
    assert episode_numbers(eps, 100, 2) == "01-02"


def test_representative_prefers_other_type():
    eps = _eps((100, "Episode", 1), (100, "Other", 4), (100, "Special", 1))
    assert representative_episode(eps, 100)["type"] == "Other"


def test_representative_by_type_then_number():
    eps = _eps((200, "Episode", 1), (100, "Special", 1), (100, "Episode", 3), (100, "Episode", 2))
    rep = representative_episode(eps, 100)
    assert (rep["type"], rep["number"]) == ("Episode", 2)


def test_representative_none_for_foreign_episodes():
    assert representative_episode(_eps((200, "Episode", 1)), 100) is None
