import json
import pathlib

import pytest

import flat_pattern_tiler as fpt
import flat_pattern_tiler.cli
import flat_pattern_tiler.config


#============================================
def test_parse_args_defaults() -> None:
	args = fpt.cli.parse_args(["outline.txt", "-o", "out.tex"])
	assert args.input == "outline.txt"
	assert args.output_path == "out.tex"
	assert args.manifest_path is None
	assert args.units == "mm"
	assert args.closed is None
	assert args.optimize_rotation
	sheet = fpt.cli.build_sheet_config(args)
	assert sheet == fpt.config.SheetConfig()


#============================================
def test_parse_args_flags() -> None:
	args = fpt.cli.parse_args(["outline.txt", "-o", "out.pdf", "-R", "--open", "-u", "in"])
	assert not args.optimize_rotation
	assert args.closed is False
	assert args.units == "in"


#============================================
def test_paper_presets() -> None:
	assert fpt.cli.paper_size_inches("letter", False) == pytest.approx((8.5, 11.0))
	assert fpt.cli.paper_size_inches("letter", True) == pytest.approx((11.0, 8.5))
	assert fpt.cli.paper_size_inches("ledger", False) == pytest.approx((17.0, 11.0))
	assert fpt.cli.paper_size_inches("tabloid", True) == pytest.approx((17.0, 11.0))


#============================================
def test_explicit_page_size_overrides_paper() -> None:
	args = fpt.cli.parse_args([
		"outline.txt", "-o", "out.tex",
		"--paper", "letter", "--landscape", "--page-height", "9", "--margin", "0.25",
	])
	sheet = fpt.cli.build_sheet_config(args)
	assert sheet.page_width == pytest.approx(11.0)
	assert sheet.page_height == 9.0
	assert sheet.margin == 0.25
	assert sheet.overlap == fpt.config.DEFAULT_OVERLAP


#============================================
def test_run_pipeline_end_to_end(tmp_path: pathlib.Path) -> None:
	source = tmp_path / "outline.txt"
	source.write_text("0,0\n30,0\n30,10\n0,10\n", encoding="utf-8")
	output_path = tmp_path / "tiles.tex"
	manifest_path = tmp_path / "tiles.json"
	args = fpt.cli.parse_args([
		str(source), "-o", str(output_path), "-m", str(manifest_path), "-u", "in",
	])
	assert fpt.cli.run_pipeline(args)
	text = output_path.read_text(encoding="utf-8")
	assert text.count("\\newpage") == 2
	data = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert data["grid"]["tiles"] == 2
	assert data["source"] == str(source)


#============================================
def test_run_pipeline_unwritable_output(tmp_path: pathlib.Path) -> None:
	source = tmp_path / "outline.txt"
	source.write_text("0,0\n100,0\n100,60\n", encoding="utf-8")
	output_path = tmp_path / "missing" / "tiles.tex"
	args = fpt.cli.parse_args([str(source), "-o", str(output_path)])
	assert not fpt.cli.run_pipeline(args)


#============================================
def test_landscape_without_paper_turns_sheet() -> None:
	args = fpt.cli.parse_args([
		"outline.txt", "-o", "out.tex",
		"--page-width", "11", "--page-height", "17", "--landscape",
	])
	sheet = fpt.cli.build_sheet_config(args)
	assert (sheet.page_width, sheet.page_height) == (17.0, 11.0)
	args = fpt.cli.parse_args(["outline.txt", "-o", "out.tex", "--page-width", "11", "--page-height", "17"])
	sheet = fpt.cli.build_sheet_config(args)
	assert (sheet.page_width, sheet.page_height) == (11.0, 17.0)


#============================================
def test_describe_sheet() -> None:
	text = fpt.config.describe_sheet(fpt.config.SheetConfig())
	assert text == "17 x 11 in sheets, margin 0.5 in, overlap 0.75 in"
