"""Tests for the comment-sentiment command line."""

import json
from functools import partial

import pytest
from conftest import FakeScorer, added_file, comment

import comment_sentiment.cli.main as cli
from comment_sentiment.models import CommitRecord
from comment_sentiment.pipeline import CommentSentimentAnalysis
from comment_sentiment.serialization import deserialize_binary

GOOD = "This is a great and elegant implementation"
BAD = "This hack is terrible and breaks everything"


@pytest.fixture
def commits_file(tmp_path):
    commits = [
        CommitRecord(hash="aaa", day=1, changes=[added_file(comment(GOOD, 1))]),
        CommitRecord(hash="bbb", day=3, changes=[added_file(comment(BAD, 1))]),
    ]
    path = tmp_path / "commits.jsonl"
    path.write_text("\n".join(commit.model_dump_json() for commit in commits) + "\n")
    return path


@pytest.fixture(autouse=True)
def fake_analysis(monkeypatch, tmp_path):
    scorer = FakeScorer({GOOD: 0.9, BAD: 0.1})
    monkeypatch.setattr(cli, "CommentSentimentAnalysis", partial(CommentSentimentAnalysis, scorer=scorer))
    monkeypatch.setattr(cli, "setup_logging", lambda: None)
    monkeypatch.chdir(tmp_path)
    return scorer


def run_cli(*argv) -> int:
    with pytest.raises(SystemExit) as exc:
        cli.main(list(argv))
    return exc.value.code


class TestRunCommand:
    """Test `comment-sentiment run`."""

    def test_text_output(self, commits_file, capsys):
        assert run_cli("run", str(commits_file), "--no-progress") == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Sentiment:"
        assert out[1] == f'  1: [0.9000, [aaa], "{GOOD}"]'
        assert out[2] == f'  3: [0.1000, [bbb], "{BAD}"]'

    def test_binary_output(self, commits_file, tmp_path):
        output = tmp_path / "result.arrow"
        assert run_cli("run", str(commits_file), "--binary", "-o", str(output), "--no-progress") == 0
        result = deserialize_binary(output.read_bytes())
        assert result.sorted_days() == [1, 3]
        assert result.days[3].commits == ["bbb"]

    def test_gap_flag(self, commits_file, capsys):
        assert run_cli("run", str(commits_file), "--sentiment-gap", "0.9", "--no-progress") == 0
        out = capsys.readouterr().out
        # deadzone (0.05, 0.95) drops both comments
        assert out == "Sentiment:\n"

    def test_commits_by_day_file(self, commits_file, tmp_path, capsys):
        mapping = tmp_path / "days.json"
        mapping.write_text(json.dumps({"1": ["x1", "x2"], "3": ["bbb"]}))
        assert run_cli("run", str(commits_file), "--commits-by-day", str(mapping), "--no-progress") == 0
        assert "[x1,x2]" in capsys.readouterr().out

    def test_invalid_input(self, tmp_path):
        bad = tmp_path / "bad.jsonl"
        bad.write_text('{"hash": "abc"}\n')
        assert run_cli("run", str(bad)) == 1

    def test_missing_input(self, tmp_path):
        assert run_cli("run", str(tmp_path / "missing.jsonl")) == 1

    def test_missing_config(self, commits_file, tmp_path, capsys):
        assert run_cli("run", str(commits_file), "--config", str(tmp_path / "absent.yaml"), "--no-progress") == 1
        assert capsys.readouterr().out == ""

    def test_nan_gap_reset(self, commits_file, capsys):
        assert run_cli("run", str(commits_file), "--sentiment-gap", "nan", "--no-progress") == 0
        out = capsys.readouterr().out.splitlines()
        assert out[1].startswith("  1: [0.9000")
        assert out[2].startswith("  3: [0.1000")

    def test_text_output_file_is_utf8(self, tmp_path):
        commit = CommitRecord(hash="caf\u00e91", day=2, changes=[added_file(comment(GOOD, 1))])
        source = tmp_path / "unicode.jsonl"
        source.write_text(commit.model_dump_json() + "\n", encoding="utf-8")
        output = tmp_path / "result.txt"
        assert run_cli("run", str(source), "-o", str(output), "--no-progress") == 0
        assert output.read_text(encoding="utf-8").splitlines()[1] == f'  2: [0.9000, [caf\u00e91], "{GOOD}"]'

    def test_scoring_failure(self, commits_file, monkeypatch):
        def broken(texts, progress=None):
            raise RuntimeError("model crashed")

        monkeypatch.setattr(cli, "CommentSentimentAnalysis", partial(CommentSentimentAnalysis, scorer=broken))
        assert run_cli("run", str(commits_file), "--no-progress") == 1


class TestOtherCommands:
    """Test `options` and `init`."""

    def test_options(self, capsys, monkeypatch):
        monkeypatch.setenv("COLUMNS", "200")
        cli.main(["options"])
        out = capsys.readouterr().out
        assert "--min-comment-len" in out
        assert "--sentiment-gap" in out

    def test_init(self, tmp_path):
        cli.main(["init", "-o", str(tmp_path / "sentiment.yaml")])
        assert "min_comment_length: 20" in (tmp_path / "sentiment.yaml").read_text()

    def test_init_does_not_overwrite(self, tmp_path):
        path = tmp_path / "sentiment.yaml"
        path.write_text("keep me")
        cli.main(["init", "-o", str(path)])
        assert path.read_text() == "keep me"

    def test_no_command(self):
        assert run_cli() == 0
