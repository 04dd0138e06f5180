"""
Tests for the collection_report CLI (collaborators mocked, no network).
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

from structlog.testing import capture_logs

from conftest import COLLECTION

from backend_verxio.aggregation.leaderboard import Leaderboard, MemberAggregate
from backend_verxio.core.exceptions import LeaderboardBuildFailed
from backend_verxio.tools import collection_report


def test_leaderboard_command_prints_json(capsys, monkeypatch):
    monkeypatch.setenv("SOLANA_RPC_URL", "https://rpc.example")
    board = Leaderboard(
        members=[MemberAggregate("alice", "a1", 120, None, "Silver", 2, rank=1)],
        program_name="Coffee Club",
        total_minted=1,
        total_members=1,
    )
    with patch.object(collection_report, "build_leaderboard", new=AsyncMock(return_value=board)) as build:
        code = collection_report.main(["leaderboard", COLLECTION, "--indent", "0"])

    assert code == 0
    assert build.await_args.args == (COLLECTION,)
    payload = json.loads(capsys.readouterr().out)
    assert payload["programName"] == "Coffee Club"
    assert payload["members"][0]["currentLevel"] == "2"


def test_failure_returns_one(capsys, monkeypatch):
    monkeypatch.setenv("SOLANA_RPC_URL", "https://rpc.example")
    failure = LeaderboardBuildFailed("Failed to fetch leaderboard")
    with patch.object(collection_report, "build_leaderboard", new=AsyncMock(side_effect=failure)):
        code = collection_report.main(["leaderboard", COLLECTION])

    assert code == 1
    err = capsys.readouterr().err
    assert "LEADERBOARD_BUILD_FAILED" in err


def test_invalid_address_returns_one(monkeypatch):
    monkeypatch.setenv("SOLANA_RPC_URL", "https://rpc.example")
    assert collection_report.main(["members", "not-an-address"]) == 1


def test_root_main_logs_start_and_delegates():
    import main

    with patch.object(collection_report, "main", return_value=0) as report_main, capture_logs() as logs:
        code = main.main(["program", COLLECTION])

    assert code == 0
    report_main.assert_called_once_with(["program", COLLECTION])
    events = [entry["event"] for entry in logs]
    assert events == ["main_start", "main_exit"]
    assert logs[0]["argv"] == ["program", COLLECTION]
    assert logs[1]["exit_code"] == 0
