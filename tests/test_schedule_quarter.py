import pandas as pd

import schedule_quarter


def write_courses(tmp_path):
    path = tmp_path / "courses.csv"
    path.write_text("Course Title,Delivery Cadence,Number of Sessions\nExcel Basics,2,2\nCoaching,6,4\n")
    return path


def test_cli_prints_statistics(tmp_path, capsys):
    path = write_courses(tmp_path)
    assert schedule_quarter.main([str(path), "--quarter", "Q1", "--year", "2025", "--quiet"]) == 0

    out = capsys.readouterr().out
    assert "Loaded 2 courses" in out
    assert "STATISTICS" in out
    assert "COURSE SCHEDULE" not in out


def test_cli_writes_workbook(tmp_path):
    path = write_courses(tmp_path)
    out_path = tmp_path / "schedule.xlsx"
    assert schedule_quarter.main([str(path), "--quarter", "Q3", "--year", "2025", "--excel", str(out_path)]) == 0
    assert "All Sessions" in pd.read_excel(out_path, sheet_name=None)


def test_cli_rejects_invalid_quarter(tmp_path, capsys):
    path = write_courses(tmp_path)
    assert schedule_quarter.main([str(path), "--quarter", "Q5", "--year", "2025"]) == 2
    assert "Invalid quarter" in capsys.readouterr().err


def test_cli_reports_missing_file(tmp_path, capsys):
    assert schedule_quarter.main([str(tmp_path / "missing.csv"), "--quarter", "Q1", "--year", "2025"]) == 2
    assert "Error reading courses" in capsys.readouterr().err


def test_cli_accepts_lowercase_quarter(tmp_path, capsys):
    path = write_courses(tmp_path)
    assert schedule_quarter.main([str(path), "--quarter", "q2", "--year", "2025", "--quiet"]) == 0
    assert "STATISTICS" in capsys.readouterr().out


def test_cli_writes_report(tmp_path, capsys):
    path = write_courses(tmp_path)
    report_path = tmp_path / "report.docx"
    assert schedule_quarter.main([str(path), "--quarter", "Q1", "--year", "2025", "--quiet",
                                  "--report", str(report_path)]) == 0

    assert report_path.exists()
    assert "Report written" in capsys.readouterr().out
