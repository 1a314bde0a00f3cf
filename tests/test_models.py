"""Tests for API models."""

from __future__ import annotations

from sportsbot.api.models import (
    BasketballTeam,
    Match,
    Player,
    StandingRow,
    TeamRef,
)


class TestTeamRef:
    def test_short_name_preferred(self):
        assert TeamRef(name="FC Internazionale Milano", shortName="Inter").short == "Inter"

    def test_short_falls_back_to_name(self):
        assert TeamRef(name="AC Milan").short == "AC Milan"


class TestMatch:
    def test_live_or_finished(self, match_payload):
        assert Match(**match_payload).is_live_or_finished is True

    def test_scheduled_is_not_live(self, match_payload):
        match_payload["status"] = "SCHEDULED"
        assert Match(**match_payload).is_live_or_finished is False

    def test_missing_score_values(self, match_payload):
        del match_payload["score"]
        assert Match(**match_payload).score is None


class TestStandingRow:
    def test_missing_numbers_stay_unknown(self):
        row = StandingRow(position=3, team={"name": "Roma"})
        assert row.points is None
        assert row.goalDifference is None


class TestPlayer:
    def test_numeric_measures_become_text(self, player_payload):
        player = Player(**player_payload)
        assert player.weight == "113"
        assert player.height == "2.06 m"

    def test_nationality_from_birth(self, player_payload):
        assert Player(**player_payload).nationality == "USA"

    def test_nationality_falls_back_to_country(self):
        player = Player(id=1, name="Luka Doncic", country="Slovenia")
        assert player.nationality == "Slovenia"

    def test_nationality_unknown(self):
        assert Player(id=1, name="Nobody").nationality is None


class TestBasketballTeam:
    def test_country_as_object(self):
        team = BasketballTeam(id=1, name="Lakers", country={"name": "USA", "code": "US"})
        assert team.country.code == "US"

    def test_country_as_plain_name(self):
        team = BasketballTeam(id=1, name="Lakers", country="USA")
        assert team.country.name == "USA"
        assert team.country.code is None
