from hookpilot.templates import checksum, executable_extension


def test_checksum_format():
    assert checksum("abc", 123) == b"abc 123\n"


def test_checksum_round_trip():
    content = checksum("deadbeef", 1700000000).decode()
    value, stamp = content.rstrip("\n").split(" ")
    assert (value, int(stamp)) == ("deadbeef", 1700000000)
    assert content.endswith("\n")


def test_windows_extension():
    assert executable_extension("windows") == ".exe"
    assert executable_extension("win32") == ".exe"


def test_other_platforms_have_no_extension():
    assert executable_extension("linux") == ""
    assert executable_extension("darwin") == ""