import json
from pathlib import Path

import pytest
import requests

import cli
from core.report_sink import ReportSink


def test_parse_take_args() -> None:
    args = cli.parse_args(
        ["--server", "http://quiz.test", "take", "abc", "--username", " alice ", "--no-fullscreen"]
    )
    assert args.command == "take"
    assert args.quiz_id == "abc"
    assert args.no_fullscreen
    assert args.server == "http://quiz.test"
    assert args.username == "alice"


def test_flush_pending(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(ReportSink, "flush_pending", lambda self: 2)
    assert cli.main(["--pending", str(tmp_path / "pending.json"), "flush-pending"]) == 0
    assert "Delivered 2 pending reports, 0 left" in capsys.readouterr().out


def test_import_quiz(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    quiz_file = tmp_path / "quiz.json"
    quiz_file.write_text(json.dumps({"title": "Capitals"}), encoding="utf-8")
    posted = []

    class FakeResponse:
        def raise_for_status(self) -> None:
            return None

        def json(self):
            return {"_id": "new-id"}

    def fake_post(url, json=None, timeout=None):
        posted.append((url, json))
        return FakeResponse()

    monkeypatch.setattr(cli.requests, "post", fake_post)
    assert cli.main(["--server", "http://quiz.test/", "import-quiz", str(quiz_file)]) == 0
    assert posted == [("http://quiz.test/api/quizzes", {"title": "Capitals"})]


def test_import_quiz_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    quiz_file = tmp_path / "quiz.json"
    quiz_file.write_text("{}", encoding="utf-8")

    def fake_post(url, json=None, timeout=None):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(cli.requests, "post", fake_post)
    assert cli.main(["import-quiz", str(quiz_file)]) == 1


@pytest.mark.parametrize("username", [None, "   "])
def test_take_requires_username(
    username: str | None, monkeypatch: pytest.MonkeyPatch, capsys
) -> None:
    monkeypatch.setattr(cli.config, "USERNAME", None)
    argv = ["take", "abc"]
    if username is not None:
        argv += ["--username", username]
    with pytest.raises(SystemExit) as excinfo:
        cli.parse_args(argv)
    assert excinfo.value.code == 2
    assert "--username" in capsys.readouterr().err


def test_pending_flag_selects_queue_file(tmp_path: Path) -> None:
    pending = tmp_path / "cli.json"
    sink = cli._make_sink(cli.parse_args(["--pending", str(pending), "flush-pending"]))
    assert sink.pending_queue.path == pending

    sink.pending_queue.append({"quizName": "offline"})
    assert json.loads(pending.read_text(encoding="utf-8")) == [{"quizName": "offline"}]
