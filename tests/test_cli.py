from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from typer.testing import CliRunner

from pdfscraper.cli import app


def _pdf(tmp_path: Path, make_pdf: Callable[..., bytes], pages: int = 2) -> Path:
    path = tmp_path / "in.pdf"
    path.write_bytes(make_pdf([[(f"Page {i}", 72, 720)] for i in range(1, pages + 1)]))
    return path


def test_help() -> None:
    result = CliRunner().invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "extract" in result.stdout


def test_extract_to_stdout(tmp_path: Path, make_pdf: Callable[..., bytes]) -> None:
    in_path = _pdf(tmp_path, make_pdf)
    result = CliRunner().invoke(app, ["extract", "--in", str(in_path)])
    assert result.exit_code == 0
    assert "Page 1" in result.stdout
    assert "Page 2" in result.stdout


def test_extract_json_with_max_pages(tmp_path: Path, make_pdf: Callable[..., bytes]) -> None:
    in_path = _pdf(tmp_path, make_pdf, pages=3)
    out_path = tmp_path / "out.json"
    result = CliRunner().invoke(
        app, ["extract", "--in", str(in_path), "--out", str(out_path), "--max-pages", "1"]
    )
    assert result.exit_code == 0
    data = json.loads(out_path.read_text(encoding="utf-8"))
    assert data["numpages"] == 3
    assert data["numrender"] == 1
    assert len(data["pages"]) == 1


def test_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "missing.pdf"
    result = CliRunner().invoke(app, ["extract", "--in", str(missing)])
    assert result.exit_code == 3


def test_unsupported_input_extension(tmp_path: Path) -> None:
    in_path = tmp_path / "doc.bin"
    in_path.write_bytes(b"data")
    result = CliRunner().invoke(app, ["extract", "--in", str(in_path)])
    assert result.exit_code == 3


def test_unsupported_output_extension(tmp_path: Path, make_pdf: Callable[..., bytes]) -> None:
    in_path = _pdf(tmp_path, make_pdf)
    result = CliRunner().invoke(
        app, ["extract", "--in", str(in_path), "--out", str(tmp_path / "out.docx")]
    )
    assert result.exit_code == 3


def test_bad_config(tmp_path: Path, make_pdf: Callable[..., bytes]) -> None:
    in_path = _pdf(tmp_path, make_pdf)
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    result = CliRunner().invoke(app, ["extract", "--in", str(in_path), "--config", str(bad_cfg)])
    assert result.exit_code == 4


def test_corrupt_pdf(tmp_path: Path) -> None:
    in_path = tmp_path / "broken.pdf"
    in_path.write_bytes(b"not a pdf at all")
    result = CliRunner().invoke(app, ["extract", "--in", str(in_path)])
    assert result.exit_code == 5


def test_unknown_engine(tmp_path: Path, make_pdf: Callable[..., bytes]) -> None:
    in_path = _pdf(tmp_path, make_pdf)
    result = CliRunner().invoke(app, ["extract", "--in", str(in_path), "--engine", "v1.10.100"])
    assert result.exit_code == 5
