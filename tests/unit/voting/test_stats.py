"""Tests for vote statistics."""

from __future__ import annotations

import json

from studentvote.voting import ModuleTally, calculate_global_stats, calculate_user_stats, summarize_module_votes
from studentvote.voting.stats import parse_votes_data


def prediction(target: str, modules: int, rattrapages: int, votes_data=None) -> dict:
    return {"voter_id": "v", "target_id": target, "modules": modules, "rattrapages": rattrapages, "votes_data": votes_data}


class TestCalculateUserStats:
    def test_empty(self):
        stats = calculate_user_stats([])

        assert (stats.total_votes, stats.avg_modules, stats.avg_rattrapages) == (0, 0.0, 0.0)

    def test_averages_rounded_to_one_decimal(self):
        stats = calculate_user_stats([prediction("t", 6, 1), prediction("t", 7, 2), prediction("t", 7, 2)])

        assert stats.total_votes == 3
        assert stats.avg_modules == 6.7
        assert stats.avg_rattrapages == 1.7

    def test_half_rounds_up(self):
        predictions = [prediction("t", 2, 0), prediction("t", 2, 0), prediction("t", 2, 0), prediction("t", 3, 1)]

        stats = calculate_user_stats(predictions)

        assert (stats.avg_modules, stats.avg_rattrapages) == (2.3, 0.3)


class TestCalculateGlobalStats:
    def test_no_predictions(self):
        stats = calculate_global_stats([], [{"id": "a"}, {"id": "b"}])

        assert stats.total_votes == 0
        assert stats.total_users == 2
        assert stats.most_voted_user is None
        assert stats.most_voted_count == 0

    def test_most_voted_user(self):
        predictions = [prediction("a", 5, 0), prediction("b", 3, 2), prediction("b", 4, 1)]
        profiles = [{"id": "a", "full_name": "ALAMI SARA"}, {"id": "b", "full_name": "MOUTTALI BILAL"}]

        stats = calculate_global_stats(predictions, profiles)

        assert stats.total_votes == 3
        assert stats.most_voted_user == "MOUTTALI BILAL"
        assert stats.most_voted_count == 2
        assert stats.avg_modules == 4.0
        assert stats.avg_rattrapages == 1.0

    def test_most_voted_without_profile(self):
        stats = calculate_global_stats([prediction("ghost", 1, 1)], [])

        assert stats.most_voted_user is None
        assert stats.most_voted_count == 1


class TestModuleVotes:
    def test_parse_json_string(self):
        assert parse_votes_data(json.dumps({"Analyse": "retake"})) == {"Analyse": "retake"}

    def test_parse_invalid(self):
        assert parse_votes_data("{oops") == {}
        assert parse_votes_data(None) == {}
        assert parse_votes_data([1, 2]) == {}

    def test_summarize(self):
        predictions = [
            prediction("a", 2, 1, {"Analyse": "validated", "Physique": "retake"}),
            prediction("a", 2, 1, json.dumps({"Analyse": "validated"})),
            prediction("b", 1, 1, "not json"),
            prediction("b", 1, 1, {"Analyse": "retake", "Anglais": "unknown"}),
        ]

        tallies = summarize_module_votes(predictions)

        assert tallies["Analyse"] == ModuleTally(validated=2, retake=1)
        assert tallies["Physique"] == ModuleTally(validated=0, retake=1)
        assert tallies["Anglais"].total == 0
        assert round(tallies["Analyse"].validated_rate, 2) == 0.67
