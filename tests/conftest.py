"""Shared fixtures: schedule documents in both feed shapes and a fake Calendar service."""
from unittest.mock import MagicMock

import pytest

from nba_sync.store import MemorySnapshotStore

TEAM_NAMES = {"BOS": "Celtics", "LAL": "Lakers", "NYK": "Knicks", "MIA": "Heat"}
TEAM_IDS = {"BOS": "1610612738", "LAL": "1610612747", "NYK": "1610612752", "MIA": "1610612748"}


def current_game(game_id, home, away, start, clock):
    return {
        "gameId": game_id,
        "gameDateTimeUTC": start,
        "gameTimeUTC": f"1900-01-01T{clock}Z",
        "homeTeam": {"teamId": int(TEAM_IDS[home]), "teamName": TEAM_NAMES[home], "teamTricode": home},
        "awayTeam": {"teamId": int(TEAM_IDS[away]), "teamName": TEAM_NAMES[away], "teamTricode": away},
    }


@pytest.fixture
def current_schedule():
    return {
        "meta": {"version": 1},
        "leagueSchedule": {
            "seasonYear": "2022-23",
            "gameDates": [
                {
                    "gameDate": "10/18/2022 00:00:00",
                    "games": [
                        current_game("0022200001", "BOS", "LAL", "2022-10-18T23:30:00Z", "23:30:00"),
                        current_game("0022200002", "NYK", "MIA", "2022-10-19T00:00:00Z", "00:00:00"),
                    ],
                },
                {
                    "gameDate": "10/20/2022 00:00:00",
                    "games": [
                        current_game("0022200003", "NYK", "BOS", "2022-10-20T23:30:00Z", "23:30:00"),
                        current_game("0022200004", "LAL", "MIA", "2022-10-21T02:00:00Z", "02:00:00"),
                    ],
                },
                {"gameDate": "10/22/2022 00:00:00", "games": []},
                {
                    "gameDate": "10/24/2022 00:00:00",
                    "games": [
                        current_game("0022200005", "MIA", "BOS", "2022-10-24T23:00:00Z", "23:00:00"),
                    ],
                },
            ],
        },
    }


@pytest.fixture
def legacy_schedule():
    def game(game_id, home, away, start):
        return {
            "gameId": game_id,
            "startTimeUTC": start,
            "hTeam": {"teamId": TEAM_IDS[home], "score": ""},
            "vTeam": {"teamId": TEAM_IDS[away], "score": ""},
        }

    return {
        "league": {
            "standard": [
                game("0012200001", "LAL", "BOS", "2022-10-02T23:00:00.000Z"),
                game("0012200002", "NYK", "MIA", "2022-10-03T23:30:00.000Z"),
                game("0012200003", "BOS", "NYK", "2022-10-05T23:30:00.000Z"),
                {
                    "gameId": "0032200001",
                    "startTimeUTC": "2023-02-20T01:00:00.000Z",
                    "hTeam": {"teamId": "1610616833"},
                    "vTeam": {"teamId": "1610616834"},
                },
            ]
        }
    }


@pytest.fixture
def legacy_teams():
    return {
        "league": {
            "standard": [
                {"teamId": TEAM_IDS[code], "tricode": code, "nickname": name, "fullName": f"Team {name}"}
                for code, name in TEAM_NAMES.items()
            ]
        }
    }


@pytest.fixture
def memory_store():
    return MemorySnapshotStore()


@pytest.fixture
def calendar_service():
    """MagicMock standing in for the googleapiclient Calendar resource."""
    service = MagicMock()
    service.events.return_value.list.return_value.execute.return_value = {"items": []}
    return service
