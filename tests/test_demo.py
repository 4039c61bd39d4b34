from typer.testing import CliRunner

from xlsxwriter_cellstream.__main__ import app
from xlsxwriter_cellstream.demo import DEMO_SHEET_NAME, write_demo
from xlsxwriter_cellstream.reader import list_sheet_names, read_sheet

runner = CliRunner()


class TestWriteDemo:
    def test_demo_workbook(self, tmp_path):
        path = tmp_path / "demo_file.xlsx"

        assert write_demo(path) == (5, 5)
        assert list_sheet_names(path) == [DEMO_SHEET_NAME]

        rows = read_sheet(path)
        assert rows[0][:2] == ["hello", "to everybody"]
        assert rows[1][:2] == ["3.1415", "1.2"]
        assert rows[-1][:2] == ["", "12.22"]


class TestCli:
    def test_demo_then_read(self, tmp_path):
        path = tmp_path / "demo_file.xlsx"

        result = runner.invoke(app, ["demo", str(path)])
        assert result.exit_code == 0, result.output
        assert "(5, 5)" in result.output

        result = runner.invoke(app, ["sheets", str(path)])
        assert result.exit_code == 0, result.output
        assert DEMO_SHEET_NAME in result.output

        result = runner.invoke(app, ["read", str(path), "--sheet", DEMO_SHEET_NAME])
        assert result.exit_code == 0, result.output
        assert "hello\tto everybody" in result.output

    def test_pwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["pwd"])

        assert result.exit_code == 0, result.output
        assert str(tmp_path) in result.output
