import csv

from eval_harness import find_cnf_files, run_benchmarks
from main import EXIT_SAT, EXIT_UNSAT, main


def test_dimacs_sat(tmp_path, capsys):
    path = tmp_path / "sat.cnf"
    path.write_text("p cnf 2 2\n1 0\n-1 2 0\n")
    assert main([str(path)]) == EXIT_SAT
    out = capsys.readouterr().out
    assert "Status: SAT" in out
    assert "1 = True" in out
    assert "2 = True" in out


def test_dimacs_unsat(tmp_path, capsys):
    path = tmp_path / "unsat.cnf"
    path.write_text("p cnf 1 2\n1 0\n-1 0\n")
    assert main([str(path)]) == EXIT_UNSAT
    assert "Status: UNSAT" in capsys.readouterr().out


def test_sudoku(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text("1234\n....\n....\n....\n")
    assert main([str(path), "--sudoku", "2"]) == EXIT_SAT
    assert "1 2 3 4" in capsys.readouterr().out


def test_unsolvable_sudoku(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text("11..\n....\n....\n....\n")
    assert main([str(path), "--sudoku", "2"]) == EXIT_UNSAT
    assert "No solution" in capsys.readouterr().out


def test_benchmarks_write_csv(tmp_path):
    (tmp_path / "b.cnf").write_text("1 0\n-1 0\n")
    (tmp_path / "a.cnf").write_text("1 2 0\n")
    (tmp_path / "notes.txt").write_text("ignored")
    out_csv = tmp_path / "results.csv"

    files = find_cnf_files(str(tmp_path))
    assert [f.rsplit("/", 1)[-1] for f in files] == ["a.cnf", "b.cnf"]

    run_benchmarks(files, out_csv=str(out_csv), timeout_sec=None)
    with open(out_csv, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [(r["file"], r["status"]) for r in rows] == [("a.cnf", "SAT"), ("b.cnf", "UNSAT")]
