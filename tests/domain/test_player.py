from xwoba_matchups.domain.player import Team
from xwoba_matchups.domain.player_split import COUNT_FIELDS, RATE_FIELDS, Role


class TestTeam:
    def test_label_prefers_abbreviation(self) -> None:
        assert Team(id=147, name="New York Yankees", abbreviation="NYY").label == "NYY"

    def test_label_falls_back_to_name(self) -> None:
        assert Team(id=147, name="New York Yankees").label == "New York Yankees"


class TestPlayerSplitFields:
    def test_role_values(self) -> None:
        assert [r.value for r in Role] == ["batter", "pitcher"]

    def test_rate_and_count_fields_disjoint(self) -> None:
        assert "xwoba" in RATE_FIELDS
        assert "pa" in COUNT_FIELDS
        assert not set(RATE_FIELDS) & set(COUNT_FIELDS)
