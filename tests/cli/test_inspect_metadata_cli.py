from __future__ import annotations

import json
from pathlib import Path

import pytest

from solmeta.cli.inspect_metadata import main as inspect_metadata_main


def _write_metadata(path: Path, *, name: str, component: str | None = None, root: str = "PISI") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    part_of = f"<PartOf>{component}</PartOf>" if component else ""
    path.write_text(
        f"""<?xml version="1.0" ?>
<{root}>
  <Source><Name>{name}-src</Name></Source>
  <Package>
    <Name>{name}</Name>
    {part_of}
  </Package>
</{root}>
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SOLMETA_READ_SIZE", "SOLMETA_TRACKING", "SOLMETA_HUGE_TREE"):
        monkeypatch.delenv(name, raising=False)


def test_cli_prints_fields_for_single_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = _write_metadata(tmp_path / "metadata.xml", name="nano", component="system.devel")

    exit_code = inspect_metadata_main(["--path", str(source)])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["processed"] == 1
    assert payload["errors"] == []
    assert payload["results"] == [
        {"source_path": str(source), "package_name": "nano", "component": "system.devel"}
    ]


def test_cli_scans_directory_and_reports_bad_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_metadata(tmp_path / "a" / "metadata.xml", name="alpha", component="desktop")
    _write_metadata(tmp_path / "b" / "pspec.xml", name="beta", root="SOL")
    _write_metadata(tmp_path / "c" / "notes.xml", name="ignored")
    broken = tmp_path / "d" / "metadata.xml"
    broken.parent.mkdir()
    broken.write_text("<PISI><Package><Name>broken</Name>", encoding="utf-8")

    exit_code = inspect_metadata_main(["--path", str(tmp_path)])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert payload["processed"] == 2
    names = {item["package_name"]: item["component"] for item in payload["results"]}
    assert names == {"alpha": "desktop", "beta": None}
    assert len(payload["errors"]) == 1
    assert payload["errors"][0]["source_path"] == str(broken)
    assert "Badly formed XML" in payload["errors"][0]["error"]


def test_cli_reports_missing_path(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    missing = tmp_path / "nowhere"

    exit_code = inspect_metadata_main(["--path", str(missing)])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert payload["processed"] == 0
    assert payload["errors"] == [{"source_path": str(missing), "error": "Path does not exist"}]


def test_cli_tracking_override(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "metadata.xml"
    source.write_text(
        "<SOL><Package><Name>acme</Name><PartOf><PartOf>inner</PartOf></PartOf></Package></SOL>",
        encoding="utf-8",
    )

    assert inspect_metadata_main(["--path", str(source), "--tracking", "toggle"]) == 0
    toggle_payload = json.loads(capsys.readouterr().out)

    assert inspect_metadata_main(["--path", str(source)]) == 0
    stack_payload = json.loads(capsys.readouterr().out)

    assert toggle_payload["results"][0]["component"] is None
    assert stack_payload["results"][0]["component"] == "inner"


def test_cli_rejects_invalid_configuration(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    source = _write_metadata(tmp_path / "metadata.xml", name="nano")
    monkeypatch.setenv("SOLMETA_READ_SIZE", "0")

    assert inspect_metadata_main(["--path", str(source)]) == 2
    assert capsys.readouterr().out == ""
