import re

import pytest

from dtg.cli import main


class TestValidateCommand:
    def test_valid(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["validate", "131337Z", "131337bfeb"]) == 0
        assert capsys.readouterr().out == "131337Z: OK\n131337bfeb: OK\n"

    def test_invalid(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["validate", "131337Z", "441200"]) == 1
        captured = capsys.readouterr()
        assert "131337Z: OK" in captured.out
        assert "441200: Invalid DTG '441200': day must be between 01 and 31, got '44'" in captured.err


class TestParseCommand:
    def test_parse(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["parse", "271337BDEC10"]) == 0
        out = capsys.readouterr().out
        assert "canonical: 271337BDEC10" in out
        assert "expanded:  271337+0200DEC10" in out
        assert "iso:       2010-12-27T13:37:00+02:00" in out

    def test_day_overflow_error(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["parse", "310000ZNOV26", "--day-overflow", "error"]) == 1
        assert "error: Invalid DTG '310000ZNOV26'" in capsys.readouterr().err

    def test_invalid(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["parse", "Hello world"]) == 1
        assert capsys.readouterr().err.startswith("error: ")


class TestZoneCommand:
    def test_zone(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["zone", "k"]) == 0
        assert capsys.readouterr().out == "K: +1000 (36000 seconds)\n"

    def test_zone_with_fields(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["zone", "N", "15", "", "20"]) == 0
        assert capsys.readouterr().out == "N: -0100 (-3600 seconds)\n"

    def test_unknown_letter(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["zone", "AB"]) == 1
        assert "unknown time zone letter 'AB'" in capsys.readouterr().err


class TestNowCommand:
    def test_now(self, capsys: pytest.CaptureFixture) -> None:
        assert main(["now", "--letter", "Z"]) == 0
        assert re.fullmatch(r"[0-9]{6}Z[A-Z]{3}[0-9]{2}\n", capsys.readouterr().out)


def test_no_command() -> None:
    with pytest.raises(SystemExit):
        main([])
