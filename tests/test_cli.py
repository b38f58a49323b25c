import json
import os

import cli
from javadeps.advice import Advice, AdviceError, CostEstimate


FIXTURE = os.path.join(os.path.dirname(__file__), "fixtures", "shop")


def test_analyze_prints_overview_and_report(capsys):
	assert cli.main(["analyze", FIXTURE, "-p", "com.shop"]) == 0
	out = capsys.readouterr().out
	assert "5 java files, 5 parsed, 0 failed" in out
	assert "Dependency cycles: 1" in out
	assert "Class: com.shop.App\n  Dependencies: com.shop.service.OrderService\n  Used by: none" in out
	assert out.index("Class: com.shop.App") < out.index("Class: com.shop.model.Customer")


def test_analyze_json(capsys):
	assert cli.main(["analyze", FIXTURE, "--project-package", "com.shop", "--no-reverse", "--json"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["files_parsed"] == 5
	assert data["graph"]["reverse_dependencies"] is None
	assert data["graph"]["dependencies"]["com.shop.model.Customer"] == ["com.shop.model.Order"]


def test_analyze_rejects_missing_directory(tmp_path, capsys):
	assert cli.main(["analyze", str(tmp_path / "missing")]) == 2
	assert "not an accessible directory" in capsys.readouterr().err


def test_analyze_rejects_bad_config(tmp_path, capsys):
	bad = tmp_path / "bad.yaml"
	bad.write_text("workers: -1\n")
	assert cli.main(["analyze", FIXTURE, "--config", str(bad)]) == 2
	assert "Error" in capsys.readouterr().err


class FakeAdvisor:
	def __init__(self, config, client=None):
		self.config = config

	def advise(self, report):
		if self.config.provider == "ollama":
			raise AdviceError("Failed to connect to ollama")
		return Advice(
			provider="anthropic",
			advice=f"{len(report.splitlines())} report lines",
			cost=CostEstimate(input_tokens=10, output_tokens=2, total_cost=0.5),
		)

	def close(self):
		pass


def test_analyze_with_advice(monkeypatch, capsys):
	monkeypatch.setattr(cli, "RefactoringAdvisor", FakeAdvisor)
	assert cli.main(["analyze", FIXTURE, "-p", "com.shop", "--advice", "anthropic"]) == 0
	out = capsys.readouterr().out
	assert "Refactoring advice:" in out
	assert "15 report lines" in out
	assert "Estimated tokens: 10 in, 2 out (~$0.5000)" in out


def test_advice_failure_is_a_warning(monkeypatch, capsys):
	monkeypatch.setattr(cli, "RefactoringAdvisor", FakeAdvisor)
	assert cli.main(["analyze", FIXTURE, "--advice", "ollama"]) == 0
	captured = capsys.readouterr()
	assert "Class: com.shop.App" in captured.out
	assert "no refactoring advice" in captured.err


def test_json_output_embeds_advice(monkeypatch, capsys):
	monkeypatch.setattr(cli, "RefactoringAdvisor", FakeAdvisor)
	assert cli.main(["analyze", FIXTURE, "-p", "com.shop", "--json", "--advice", "anthropic"]) == 0
	data = json.loads(capsys.readouterr().out)
	assert data["files_parsed"] == 5
	assert data["advice"]["advice"] == "15 report lines"
	assert data["advice"]["cost"]["total_cost"] == 0.5
