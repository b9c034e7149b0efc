"""Tests for the fibregs command line."""

import pytest

from fibregs.cli import main

RECURSIVE_DRIVER = """
#define Fibonacci_num 10

int main()
{
    // EXAMPLE0();
    EXAMPLE1(0, 1);
    return 0;
}
"""


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestMain:
    """Tests for running generators from the command line."""

    def test_default_is_iterative(self, capsys):
        assert main([]) == 0
        lines = output_lines(capsys)
        assert len(lines) == 10
        assert lines[0] == "Fibonacci_0: 0"
        assert lines[-1] == "Fibonacci_9: 34"

    def test_recursive_mode(self, capsys):
        assert main(["--mode", "recursive"]) == 0
        lines = output_lines(capsys)
        assert lines[0] == "Fibonacci_num: 1"
        assert lines[-1] == "Fibonacci_num: 144"
        assert len(lines) == 11

    def test_zero_count_prints_nothing(self, capsys):
        assert main(["--count", "0"]) == 0
        assert output_lines(capsys) == []

    def test_wrapped_recursive_run(self, capsys):
        assert main(["--mode", "recursive", "--seed", "100", "200"]) == 0
        assert output_lines(capsys) == ["Fibonacci_num: 44", "Fibonacci_num: 244"]

    def test_unbounded_recursive_run(self, capsys):
        assert main(["--mode", "recursive", "--seed", "100", "200", "--unbounded"]) == 0
        assert output_lines(capsys) == ["Fibonacci_num: 300"]

    def test_driver_file(self, tmp_path, capsys):
        path = tmp_path / "fibonacci.c"
        path.write_text(RECURSIVE_DRIVER)
        assert main([str(path)]) == 0
        assert output_lines(capsys)[-1] == "Fibonacci_num: 144"

    def test_flags_override_driver(self, tmp_path, capsys):
        path = tmp_path / "fibonacci.c"
        path.write_text(RECURSIVE_DRIVER)
        assert main([str(path), "--mode", "iterative", "--count", "3"]) == 0
        assert output_lines(capsys) == ["Fibonacci_0: 0", "Fibonacci_1: 1", "Fibonacci_2: 1"]


class TestMainErrors:
    """Tests for bad input on the command line."""

    @pytest.mark.parametrize("argv", [
        ["--count", "-1"],
        ["--seed", "0", "256"],
        ["--width", "0"],
        ["--width", "8", "--unbounded"],
        ["--mode", "sideways"],
    ])
    def test_invalid_arguments_exit_2(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            main(argv)
        assert excinfo.value.code == 2

    def test_negative_driver_count_exits_2(self, tmp_path):
        path = tmp_path / "fibonacci.c"
        path.write_text("#define Fibonacci_num -1\nint main()\n{\n    EXAMPLE0();\n    return 0;\n}\n")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])
        assert excinfo.value.code == 2

    def test_out_of_range_driver_seed_exits_2(self, tmp_path):
        path = tmp_path / "fibonacci.c"
        path.write_text("int main()\n{\n    EXAMPLE1(0, 300);\n    return 0;\n}\n")
        with pytest.raises(SystemExit) as excinfo:
            main([str(path)])
        assert excinfo.value.code == 2

    def test_limit_beyond_register_returns_1(self, capsys, caplog):
        argv = ["--mode", "recursive", "--width", "24", "--limit", str(2 ** 24)]
        assert main(argv) == 1
        assert output_lines(capsys) == []
        assert "never exceeds" in caplog.text

    def test_bad_driver_returns_1(self, tmp_path, caplog):
        path = tmp_path / "broken.c"
        path.write_text("int main( {")
        assert main([str(path)]) == 1
        assert "Cannot parse" in caplog.text

    def test_missing_driver_returns_1(self, tmp_path, caplog):
        assert main([str(tmp_path / "missing.c")]) == 1
        assert "Cannot read" in caplog.text

    def test_non_terminating_seed_returns_1(self, capsys, caplog):
        assert main(["--mode", "recursive", "--seed", "0", "0"]) == 1
        assert output_lines(capsys) == ["Fibonacci_num: 0"]
        assert "never exceeds" in caplog.text or "cycles" in caplog.text
