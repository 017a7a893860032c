import io

from gridslam.memusage import memory_usage, print_memory_usage

STATUS = "Name:\tworker\nVmSize:\t  1000 kB\nVmRSS:\t 50 kB\nVmData:\t  200 kB\n"


def test_memory_usage_reads_values(tmp_path):
    path = tmp_path / "status"
    path.write_text(STATUS)
    assert memory_usage(str(path)) == {"VmSize": "1000", "VmData": "200"}


def test_print_memory_usage_format(tmp_path):
    path = tmp_path / "status"
    path.write_text(STATUS)
    out = io.StringIO()
    print_memory_usage(out, str(path))
    assert out.getvalue() == "#VmSize:\t1000\n#VmData:\t200\n"


def test_missing_file_gives_nothing(tmp_path):
    missing = str(tmp_path / "absent")
    assert memory_usage(missing) == {}
    out = io.StringIO()
    print_memory_usage(out, missing)
    assert out.getvalue() == ""