"""
Tests for the offline recommend.py pass (snapshot and store inputs).
"""
import json
import sys

import pytest

import recommend


def write_snapshot(path, n=6, referrals=()):
    path.write_text(json.dumps({
        "signups":   [{"id": f"s{i}", "user_id": f"u{i}"} for i in range(1, n + 1)],
        "profiles":  [{"id": f"u{i}", "display_name": f"User {i}", "preferences": None} for i in range(1, n + 1)],
        "referrals": [list(e) for e in referrals],
    }))
    return path


class TestRun:
    def test_snapshot_input(self, tmp_path):
        snap = write_snapshot(tmp_path / "event.json", referrals=[("u5", "u6")])
        result = recommend.run("q1", snapshot=snap, squad_size=3)
        assert result["event_id"] == "q1"
        assert [[m["user_id"] for m in s["members"]] for s in result["squads"]] == [
            ["u5", "u6", "u1"],
            ["u2", "u3", "u4"],
        ]

    def test_store_input(self, store):
        for i in range(1, 4):
            store.profile(f"u{i}", f"User {i}").signup("q1", f"u{i}")
        path = store.close()
        result = recommend.run("q1", db_path=path, squad_size=3, prioritize_referrals=False)
        assert len(result["squads"]) == 1
        assert result["total_pending"] == 3

    def test_missing_store(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            recommend.run("q1", db_path=tmp_path / "missing.db")


class TestMain:
    def test_writes_json_and_summary(self, tmp_path, monkeypatch, capsys):
        snap = write_snapshot(tmp_path / "event.json", n=4)
        out = tmp_path / "out" / "squads.json"
        monkeypatch.setattr(sys, "argv", [
            "recommend.py", "q1", "--snapshot", str(snap), "--squad-size", "3", "--out", str(out),
        ])
        recommend.main()
        result = json.loads(out.read_text())
        assert [len(s["members"]) for s in result["squads"]] == [3]
        assert [u["user_id"] for u in result["unassigned_users"]] == ["u4"]
        printed = capsys.readouterr().out
        assert "Squad A" in printed
        assert "Unassigned (1): User 4" in printed

    def test_empty_event_prints_message(self, tmp_path, monkeypatch, capsys):
        snap = write_snapshot(tmp_path / "event.json", n=0)
        monkeypatch.setattr(sys, "argv", ["recommend.py", "q1", "--snapshot", str(snap)])
        recommend.main()
        result = json.loads(capsys.readouterr().out)
        assert result["message"] == "No pending signups found"

    def test_missing_store_exits(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["recommend.py", "q1", "--db", str(tmp_path / "missing.db")])
        with pytest.raises(SystemExit) as exc:
            recommend.main()
        assert exc.value.code == 1
