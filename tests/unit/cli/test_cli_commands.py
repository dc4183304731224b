"""Tests for the dentrecon CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dentrecon.cli.main import app, setup_logging

runner = CliRunner()


@pytest.fixture
def invoke(tmp_path: Path):
    log_file = tmp_path / "dentrecon.log"

    def _invoke(*args: str):
        return runner.invoke(app, ["--log-file", str(log_file), *args])

    return _invoke


@pytest.fixture
def write_json(tmp_path: Path):
    def _write(name: str, data: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestSetupLogging:
    def test_file_sink(self, tmp_path: Path) -> None:
        from loguru import logger

        log_file = tmp_path / "run.log"
        setup_logging(verbose=False, log_file=log_file)
        logger.info("hello")

        assert len(logger._core.handlers) == 1
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_verbose_adds_stderr(self, tmp_path: Path) -> None:
        from loguru import logger

        setup_logging(verbose=True, log_file=tmp_path / "run.log")
        assert len(logger._core.handlers) == 2


class TestCanonicalize:
    def test_json_output(self, invoke, write_json) -> None:
        path = write_json(
            "draft.json",
            {"findings": [{"tooth": "UR3", "findings": ["plaque"], "severity": "sev"}]},
        )

        result = invoke("canonicalize", str(path), "--json")

        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert rows == [
            {
                "tooth_fdi": 13,
                "findings": ["plaque"],
                "severity": "low",
                "confidence": 0.5,
                "image_index": 0,
                "image_id": "image-0",
                "overlays": [],
            }
        ]

    def test_manifest_file(self, invoke, write_json) -> None:
        draft = write_json("draft.json", [{"tooth": 11, "image_index": 1}])
        manifest = write_json("manifest.json", ["front.jpg", {"id": "upper.jpg"}])

        result = invoke("canonicalize", str(draft), "--manifest", str(manifest), "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["image_id"] == "upper.jpg"

    def test_bounds_option(self, invoke, write_json) -> None:
        path = write_json(
            "draft.json",
            [
                {"tooth": 11, "overlays": [{"type": "bbox", "bbox": [0.1, 0.2, 0.3, 0.4]}]},
                {"tooth": 21},
            ],
        )

        result = invoke("canonicalize", str(path), "--json", "--bounds")

        assert result.exit_code == 0
        rows = json.loads(result.stdout)
        assert rows[0]["bounds"] == [0.1, 0.2, 0.3, 0.4]
        assert rows[1]["bounds"] == [0.0, 0.0, 1.0, 1.0]

    def test_bounds_column(self, invoke, write_json) -> None:
        path = write_json(
            "draft.json",
            [{"tooth": 11, "overlays": [{"type": "bbox", "bbox": [0.1, 0.2, 0.3, 0.4]}]}],
        )

        result = invoke("canonicalize", str(path), "--bounds")

        assert result.exit_code == 0
        assert "Findings" in result.stdout

    def test_table_output(self, invoke, write_json) -> None:
        path = write_json("draft.json", [{"tooth": 16, "findings": ["caries"]}])

        result = invoke("canonicalize", str(path))

        assert result.exit_code == 0
        assert "16" in result.stdout
        assert "caries" in result.stdout

    def test_no_findings(self, invoke, tmp_path: Path) -> None:
        path = tmp_path / "draft.txt"
        path.write_text("The model declined.", encoding="utf-8")

        result = invoke("canonicalize", str(path))

        assert result.exit_code == 0
        assert "No findings" in result.stdout

    def test_zero_images_fails(self, invoke, write_json) -> None:
        path = write_json("draft.json", [{"tooth": 11}])

        result = invoke("canonicalize", str(path), "--images", "0")

        assert result.exit_code == 1
        assert "manifest" in result.stdout

    def test_missing_file(self, invoke, tmp_path: Path) -> None:
        result = invoke("canonicalize", str(tmp_path / "nope.json"))
        assert result.exit_code == 1


class TestDiff:
    def test_modified(self, invoke, write_json) -> None:
        before = write_json("before.json", [{"tooth": "11", "note": "chip", "severity": "low"}])
        after = write_json("after.json", [{"tooth": "11", "note": "chip", "severity": "high"}])

        result = invoke("diff", str(before), str(after), "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "added": [],
            "removed": [],
            "modified": [
                {
                    "tooth": "11",
                    "from": {"note": "chip", "severity": "low"},
                    "to": {"note": "chip", "severity": "high"},
                }
            ],
        }

    def test_identical(self, invoke, write_json) -> None:
        rows = write_json("rows.json", [{"tooth": 21, "note": "stain"}])

        result = invoke("diff", str(rows), str(rows))

        assert result.exit_code == 0
        assert "No differences" in result.stdout


class TestApply:
    def test_remove_from_rebuttal_document(self, invoke, write_json) -> None:
        base = write_json("base.json", [{"tooth": 21, "note": "chip"}, {"tooth": 11}])
        changes = write_json(
            "changes.json",
            {"rebuttal": {"finding_changes": [{"op": "remove", "target_tooth_fdi": 21}]}},
        )

        result = invoke("apply", str(base), str(changes), "--json")

        assert result.exit_code == 0
        assert [row["tooth_fdi"] for row in json.loads(result.stdout)] == [11]

    def test_bare_change_list(self, invoke, write_json) -> None:
        base = write_json("base.json", [])
        changes = write_json(
            "changes.json", [{"op": "add", "tooth": "2.6", "after": {"note": "caries"}}]
        )

        result = invoke("apply", str(base), str(changes), "--json")

        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["tooth_fdi"] == 26


class TestTooth:
    def test_json(self, invoke) -> None:
        result = invoke("tooth", "UR3", "--json")

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["fdi"] == 13
        assert data["universal"] == 6
        assert data["palmer"] == "UR3"
        assert data["name"] == "Maxillary right canine"

    def test_unresolvable(self, invoke) -> None:
        result = invoke("tooth", "gum")

        assert result.exit_code == 1
        assert "Cannot resolve tooth" in result.stdout

    def test_list_primary(self, invoke) -> None:
        result = invoke("teeth", "--range", "primary")

        assert result.exit_code == 0
        assert len(result.stdout.strip().splitlines()) == 20


class TestReportCommands:
    def test_draft_rebuttal_compare(self, invoke, write_json, tmp_path: Path) -> None:
        state = str(tmp_path / "state")
        draft = write_json(
            "draft.json",
            {
                "summary": "Crowding",
                "findings": [{"tooth": 16, "note": "caries", "severity": "high"}],
            },
        )
        rebuttal = write_json(
            "rebuttal.json",
            {
                "payload": {
                    "rebuttal": {
                        "finding_changes": [
                            {"op": "modify", "tooth": 16, "after": {"note": "caries"}}
                        ]
                    }
                }
            },
        )

        first = invoke("report", "draft", "case-1", str(draft), "--state-dir", state, "--json")
        second = invoke("report", "rebuttal", "case-1", str(rebuttal), "--state-dir", state)
        history = invoke("report", "history", "case-1", "--state-dir", state)
        compare = invoke("report", "compare", "case-1", "--state-dir", state, "--json")

        assert first.exit_code == 0
        assert json.loads(first.stdout)["version"] == 1
        assert second.exit_code == 0
        assert "v2" in second.stdout
        assert history.exit_code == 0
        assert "ai_draft" in history.stdout
        assert compare.exit_code == 0
        assert json.loads(compare.stdout)["modified"][0]["to"]["severity"] == "low"

    def test_rebuttal_without_base(self, invoke, write_json, tmp_path: Path) -> None:
        rebuttal = write_json("rebuttal.json", {})

        result = invoke(
            "report", "rebuttal", "case-9", str(rebuttal), "--state-dir", str(tmp_path / "s")
        )

        assert result.exit_code == 1
        assert "No report for case case-9" in result.stdout

    def test_history_empty(self, invoke, tmp_path: Path) -> None:
        result = invoke("report", "history", "case-9", "--state-dir", str(tmp_path / "s"))

        assert result.exit_code == 0
        assert "No reports" in result.stdout

    def test_strict_preset_accepted(self, invoke, write_json) -> None:
        path = write_json("draft.json", [{"tooth": 11}])
        result = invoke("--preset", "strict", "canonicalize", str(path), "--json")
        assert result.exit_code == 0


class TestFindingsFormatter:
    def test_region_column(self, finding_factory) -> None:
        from rich.console import Console

        from dentrecon.cli.formatters.findings_formatter import format_findings
        from dentrecon.domain.value_objects.overlay import BoxOverlay

        console = Console(record=True, width=200)
        finding = finding_factory(tooth=11, overlays=(BoxOverlay(bbox=(0.1, 0.2, 0.3, 0.4)),))

        format_findings(console, [finding, finding_factory(tooth=21)], show_bounds=True)

        text = console.export_text()
        assert "Region" in text
        assert "0.10,0.20 0.30x0.40" in text
