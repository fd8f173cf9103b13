"""
Tests: reviewer command line.

Run with:
    pytest capability_review/tests/test_cli.py -v
"""

import json

from capability_review.main import run
from capability_review.services.submission_service import SubmissionService


def _submit(storage, tmp_path, capsys, username="alice", **fields):
    form = tmp_path / f"form-{username}.json"
    form.write_text(json.dumps(fields), encoding="utf-8")
    assert run(["--storage", str(storage), "submit", str(form), "--by", "u-1", "--username", username]) == 0
    return json.loads(capsys.readouterr().out)


class TestCli:
    def test_submit_and_show(self, storage_file, tmp_path, capsys):
        created = _submit(storage_file, tmp_path, capsys, companyName="Acme", coreProducts="arm")
        assert created["status"] == "PENDING"
        assert created["coreProducts"] == ["arm"]

        assert run(["--storage", str(storage_file), "show", created["id"]]) == 0
        shown = json.loads(capsys.readouterr().out)
        assert shown["companyName"] == "Acme"

    def test_show_unknown(self, storage_file, capsys):
        assert run(["--storage", str(storage_file), "show", "nope"]) == 1
        assert "not found" in capsys.readouterr().err

    def test_decide(self, storage_file, tmp_path, capsys):
        created = _submit(storage_file, tmp_path, capsys, companyName="Acme")
        code = run([
            "--storage", str(storage_file), "decide", created["id"], "approve",
            "--remark", "looks good", "--by", "r-1", "--name", "Reviewer",
        ])
        assert code == 0
        decided = json.loads(capsys.readouterr().out)
        assert decided["status"] == "APPROVED"
        assert decided["decisionReason"] == "looks good"

        store = SubmissionService(storage_path=storage_file)
        assert store.get_submission(created["id"]).decision_by_name == "Reviewer"

    def test_decide_bad_action(self, storage_file, tmp_path, capsys):
        created = _submit(storage_file, tmp_path, capsys)
        assert run(["--storage", str(storage_file), "decide", created["id"], "maybe", "--by", "r"]) == 2

    def test_decide_unknown_id(self, storage_file, capsys):
        assert run(["--storage", str(storage_file), "decide", "nope", "reject", "--by", "r"]) == 1

    def test_list_and_stats(self, storage_file, tmp_path, capsys):
        a = _submit(storage_file, tmp_path, capsys, username="alice", companyName="A")
        _submit(storage_file, tmp_path, capsys, username="bob", companyName="B")

        assert run(["--storage", str(storage_file), "list", "--user", "alice"]) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 1
        assert lines[0].startswith(a["id"])

        assert run(["--storage", str(storage_file), "list"]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 2

        assert run(["--storage", str(storage_file), "stats"]) == 0
        out = capsys.readouterr().out
        assert "PENDING  2" in out
        assert "APPROVED 0" in out

    def test_submit_missing_file(self, storage_file, tmp_path, capsys):
        missing = tmp_path / "nope.json"
        code = run(["--storage", str(storage_file), "submit", str(missing), "--by", "u-1", "--username", "alice"])
        assert code == 2
        assert "Cannot read" in capsys.readouterr().err

    def test_submit_invalid_json(self, storage_file, tmp_path, capsys):
        form = tmp_path / "broken.json"
        form.write_text("{companyName: Acme", encoding="utf-8")
        code = run(["--storage", str(storage_file), "submit", str(form), "--by", "u-1", "--username", "alice"])
        assert code == 2
        assert "Cannot read" in capsys.readouterr().err
        assert SubmissionService(storage_path=storage_file).list_submissions() == []
