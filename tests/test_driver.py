import numpy as np
import pytest

from persistence1d.driver import BuildParser, LoadData, ResultFilename, main
from persistence1d.errors import DataFileError, DataFormatError

EXAMPLE_DATA = [2.0, 5.0, 7.0, -12.0, -13.0, -7.0, 10.0, 18.0, 6.0, 8.0, 7.0, 4.0]


@pytest.fixture
def data_file(tmp_path):
    Filename = tmp_path / "data.txt"
    Filename.write_text("".join("%g\n" % v for v in EXAMPLE_DATA))
    return Filename


def _ReadResult(tmp_path):
    return (tmp_path / "data_res.txt").read_text().split()


def test_result_filename():
    assert ResultFilename("signal.txt") == "signal_res.txt"
    assert ResultFilename("dir/signal.data") == "dir/signal_res.txt"
    assert ResultFilename("signal") == "signal_res.txt"


def test_load_data(data_file):
    assert LoadData(str(data_file)).tolist() == EXAMPLE_DATA


def test_load_single_value(tmp_path):
    Filename = tmp_path / "one.txt"
    Filename.write_text("10.5\n")
    Data = LoadData(str(Filename))
    assert Data.shape == (1,)
    assert Data[0] == 10.5


def test_load_empty_file(tmp_path):
    Filename = tmp_path / "empty.txt"
    Filename.write_text("")
    assert LoadData(str(Filename)).size == 0


def test_load_missing_file(tmp_path):
    with pytest.raises(DataFileError):
        LoadData(str(tmp_path / "missing.txt"))


@pytest.mark.parametrize("Content", ["1.0\nabc\n2.0\n", "1.0\nnan\n", "1 2\n3 4\n"])
def test_load_malformed_file(tmp_path, Content):
    Filename = tmp_path / "bad.txt"
    Filename.write_text(Content)
    with pytest.raises(DataFormatError):
        LoadData(str(Filename))


def test_main_writes_all_pairs(data_file, tmp_path):
    assert main([str(data_file)]) == 0
    assert _ReadResult(tmp_path) == ["8", "9", "0", "2", "11", "7"]


def test_main_threshold_and_matlab_indexing(data_file, tmp_path):
    assert main([str(data_file), "10", "-MATLAB"]) == 0
    assert _ReadResult(tmp_path) == ["12", "8"]

    assert main([str(data_file), "-matlab", "4.5"]) == 0
    assert _ReadResult(tmp_path) == ["1", "3", "12", "8"]


def test_main_no_pairs_writes_empty_file(data_file, tmp_path):
    assert main([str(data_file), "100"]) == 0
    assert _ReadResult(tmp_path) == []


@pytest.mark.parametrize("Threshold", ["-1", "abc", "nan"])
def test_main_rejects_bad_threshold(data_file, Threshold):
    with pytest.raises(SystemExit) as e:
        main([str(data_file), Threshold])
    assert e.value.code == 2


def test_main_rejects_misspelled_flag(data_file):
    with pytest.raises(SystemExit) as e:
        main([str(data_file), "-MATLBA"])
    assert e.value.code == 2


def test_main_missing_file(tmp_path, caplog):
    assert main([str(tmp_path / "missing.txt")]) == 3
    assert "cannot open file" in caplog.text
    assert not (tmp_path / "missing_res.txt").exists()


def test_main_malformed_file(tmp_path):
    Filename = tmp_path / "bad.txt"
    Filename.write_text("1.0\nabc\n")
    assert main([str(Filename)]) == 4
    assert not (tmp_path / "bad_res.txt").exists()


@pytest.mark.parametrize("Arguments", [["data.txt", "4.5", "-MATLAB"], ["data.txt", "-MATLAB", "4.5"]])
def test_flag_and_threshold_in_any_order(Arguments):
    args = BuildParser().parse_intermixed_args(Arguments)
    assert (args.filename, args.threshold, args.matlab) == ("data.txt", 4.5, True)


def test_main_flag_before_threshold(data_file, tmp_path):
    assert main([str(data_file), "-MATLAB", "10"]) == 0
    assert _ReadResult(tmp_path) == ["12", "8"]


def test_malformed_file_names_the_line(tmp_path):
    Filename = tmp_path / "bad.txt"
    Filename.write_text("1.0\n\n# comment\n2.0\nabc\n3.0\n")
    with pytest.raises(DataFormatError, match="line 5: 'abc' is not a number"):
        LoadData(str(Filename))


def test_non_finite_value_names_the_line(tmp_path):
    Filename = tmp_path / "bad.txt"
    Filename.write_text("1.0\n\ninf\n")
    with pytest.raises(DataFormatError, match="line 3: 'inf' is not a finite number"):
        LoadData(str(Filename))
