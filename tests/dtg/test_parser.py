import unittest
from datetime import datetime, timedelta, timezone

from parameterized import parameterized

from dtg.clock import Clock, FixedClock, SystemClock
from dtg.enums import DayOverflow, Month, TimeZoneLetter
from dtg.exceptions import (
    FieldRangeError,
    InvalidDTGError,
    InvalidFormatError,
    UnknownLetterError,
    UnknownMonthError,
)
from dtg.formatting import format_dtg, format_expanded
from dtg.parser import DTGFields, get_numeric_time_zone, parse_datetime, parse_fields, resolve, validate

HOUR = 3600

# 18 Oct 2026, 09:30 UTC, with a local time zone of UTC+1
CLOCK = FixedClock(datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc), offset=HOUR)


class SeasonalClock(Clock):
    """A clock whose local time zone is UTC+1 from April to October, and UTC otherwise."""

    def __init__(self, instant: datetime):
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def local_offset(self, at: datetime | None = None) -> timedelta:
        at = at or self._instant
        return timedelta(hours=1) if 4 <= at.month <= 10 else timedelta(0)


class TestValidate(unittest.TestCase):
    @parameterized.expand([
        ("day hour minute", "030102"),
        ("uppercase letter", "131337Z"),
        ("lowercase letter", "131337m"),
        ("uppercase letter upper", "131337M"),
        ("local letter", "131337J"),
        ("month without year", "131337bfeb"),
        ("lowercase month and year", "171819udec28"),
        ("full", "171819AAPR12"),
        ("end of ranges", "312359YDEC99"),
        ("start of ranges", "010000ZJAN00"),
    ])
    def test_valid(self, _, text):
        """Test that valid DTGs pass validation."""
        validate(text)

    @parameterized.expand([
        ("too short", "0102", InvalidFormatError),
        ("empty", "", InvalidFormatError),
        ("words", "Hello world", InvalidFormatError),
        ("five digits", "12024", InvalidFormatError),
        ("short month", "121314ZAP", InvalidFormatError),
        ("year without month", "121212Z26", InvalidFormatError),
        ("month without letter", "121212FEB26", InvalidFormatError),
        ("too long", "121212ZFEB261", InvalidFormatError),
        ("leading space", " 121212Z", InvalidFormatError),
        ("trailing newline", "121212Z\n", InvalidFormatError),
        ("non-ascii digits", "١٢١٢١٢Z", InvalidFormatError),
        ("day 00", "001022", FieldRangeError),
        ("day 32", "321022", FieldRangeError),
        ("day 44", "441200", FieldRangeError),
        ("day 44 with letter", "441200J", FieldRangeError),
        ("day 44 with month year", "441200ZDEC29", FieldRangeError),
        ("day before hour", "442663AJAN11", FieldRangeError),
        ("hour 92", "159218", FieldRangeError),
        ("hour 24", "152400Z", FieldRangeError),
        ("minute 65", "102265ADEC12", FieldRangeError),
        ("minute 60", "102260", FieldRangeError),
        ("non-ascii letter", "121212ÖFEB02", UnknownLetterError),
        ("punctuation letter", "121212-FEB02", UnknownLetterError),
        ("unknown month", "121212AFXB01", UnknownMonthError),
    ])
    def test_invalid(self, _, text, error):
        """Test that invalid DTGs fail validation, with the error for the first problem found."""
        with self.assertRaises(error) as err:
            validate(text)
        self.assertIsInstance(err.exception, InvalidDTGError)
        self.assertEqual(err.exception.value, text)

    def test_case_insensitive_letter(self):
        """Test that lowercase and uppercase letters are parsed identically."""
        self.assertEqual(parse_fields("131337m"), parse_fields("131337M"))

    def test_not_a_string(self):
        with self.assertRaises(TypeError):
            validate(131337)

    def test_error_message(self):
        with self.assertRaises(FieldRangeError) as err:
            validate("441200")
        self.assertEqual(err.exception.cause, "day must be between 01 and 31, got '44'")
        self.assertEqual(str(err.exception), "Invalid DTG '441200': day must be between 01 and 31, got '44'")


class TestParseFields(unittest.TestCase):
    @parameterized.expand([
        ("day hour minute", "030102", DTGFields(3, 1, 2)),
        ("letter", "131337z", DTGFields(13, 13, 37, TimeZoneLetter.Z)),
        ("month", "131337bfeb", DTGFields(13, 13, 37, TimeZoneLetter.B, Month.FEB)),
        ("full", "171819AAPR12", DTGFields(17, 18, 19, TimeZoneLetter.A, Month.APR, 2012)),
        ("year 00", "171819AAPR00", DTGFields(17, 18, 19, TimeZoneLetter.A, Month.APR, 2000)),
    ])
    def test_parse_fields(self, _, text, expected):
        self.assertEqual(parse_fields(text), expected)

    def test_source(self):
        """Test that the fields remember the string they came from."""
        self.assertEqual(parse_fields("131337z").source, "131337z")


class TestParseDatetime(unittest.TestCase):
    @parameterized.expand([
        ("utc compact", "241500Z", "241500+0000OCT26", "241500ZOCT26"),
        ("minus one compact", "010000N", "010000-0100OCT26", "010000NOCT26"),
        ("minus nine compact", "271337V", "271337-0900OCT26", "271337VOCT26"),
        ("minus twelve compact", "271337Y", "271337-1200OCT26", "271337YOCT26"),
        ("utc full", "271337ZJAN29", "271337+0000JAN29", "271337ZJAN29"),
        ("plus two full", "271337BDEC10", "271337+0200DEC10", "271337BDEC10"),
        ("month only", "131337bfeb", "131337+0200FEB26", "131337BFEB26"),
        ("lowercase", "171819udec28", "171819-0800DEC28", "171819UDEC28"),
    ])
    def test_parse(self, _, text, expected_expanded, expected_dtg):
        """Test parsing of DTGs with an explicit letter, with missing month/year taken from the clock."""
        result = parse_datetime(text, CLOCK)
        self.assertEqual(format_expanded(result), expected_expanded)
        self.assertEqual(format_dtg(result), expected_dtg)

    @parameterized.expand([
        ("no letter", "142339"),
        ("local letter", "142339J"),
        ("lowercase local letter", "142339j"),
    ])
    def test_parse_local(self, _, text):
        """Test that a DTG without a letter, or with J, is in the local time zone of the clock."""
        result = parse_datetime(text, CLOCK)
        self.assertEqual(result.utcoffset(), timedelta(hours=1))
        self.assertEqual(result.tzname(), "+0100")
        self.assertEqual(format_expanded(result), "142339+0100OCT26")

    def test_parse_instant(self):
        """Test that the parsed time is the right absolute instant."""
        result = parse_datetime("271337BDEC10", CLOCK)
        self.assertEqual(result, datetime(2010, 12, 27, 11, 37, tzinfo=timezone.utc))
        self.assertEqual(result.second, 0)

    def test_parse_local_non_hour_offset(self):
        """Test that a local time zone that isn't a whole number of hours is kept, and formats as J."""
        clock = FixedClock(datetime(2026, 10, 18, 9, 30), offset=timedelta(hours=5, minutes=30))
        result = parse_datetime("142339", clock)
        self.assertEqual(format_expanded(result), "142339+0530OCT26")
        self.assertEqual(format_dtg(result), "142339JOCT26")

    @parameterized.expand([
        ("winter", "151200JJAN27", "151200+0000JAN27"),
        ("summer", "151200JJUL27", "151200+0100JUL27"),
        ("no letter winter", "151200", "151200+0000DEC26"),
    ])
    def test_parse_local_uses_parsed_date(self, _, text, expected):
        """Test that the local offset is the one in effect on the parsed date, not today's."""
        clock = SeasonalClock(datetime(2026, 12, 1, tzinfo=timezone.utc))
        self.assertEqual(format_expanded(parse_datetime(text, clock)), expected)

    def test_parse_system_clock(self):
        """Test parsing against the real clock, for a DTG that doesn't depend on it."""
        result = parse_datetime("271337BDEC10", SystemClock())
        self.assertEqual(format_dtg(result), "271337BDEC10")

    def test_parse_default_clock(self):
        """Test that omitted month and year come from the current UTC date when no clock is given."""
        before = datetime.now(timezone.utc)
        result = parse_datetime("010000Z")
        after = datetime.now(timezone.utc)
        self.assertIn((result.year, result.month), {(before.year, before.month), (after.year, after.month)})

    @parameterized.expand([
        ("invalid", "441200"),
        ("unknown month", "121212AFXB01"),
    ])
    def test_parse_invalid(self, _, text):
        with self.assertRaises(InvalidDTGError):
            parse_datetime(text, CLOCK)


class TestDayOverflow(unittest.TestCase):
    @parameterized.expand([
        ("31 november", "310000ZNOV26", datetime(2026, 12, 1, tzinfo=timezone.utc)),
        ("30 february", "301200ZFEB27", datetime(2027, 3, 2, 12, tzinfo=timezone.utc)),
        ("31 december", "312359ZDEC26", datetime(2026, 12, 31, 23, 59, tzinfo=timezone.utc)),
    ])
    def test_rollover(self, _, text, expected):
        """Test that by default days beyond the end of the month roll over into the next month."""
        self.assertEqual(parse_datetime(text, CLOCK), expected)
        self.assertEqual(parse_datetime(text, CLOCK, "rollover"), expected)

    def test_rollover_format(self):
        """Test that a rolled over DTG formats as the normalised date."""
        self.assertEqual(format_dtg(parse_datetime("310000ZNOV26", CLOCK)), "010000ZDEC26")

    @parameterized.expand([
        ("31 november", "310000ZNOV26"),
        ("29 february non-leap", "291200ZFEB27"),
        ("31 november, year from clock", "311200ZNOV"),
    ])
    def test_error(self, _, text):
        """Test that days beyond the end of the month are rejected when asked to."""
        with self.assertRaises(FieldRangeError) as err:
            parse_datetime(text, CLOCK, DayOverflow.ERROR)
        self.assertEqual(err.exception.value, text)

    def test_error_leap_year(self):
        """Test that the 29th of February is fine in a leap year."""
        result = parse_datetime("291200ZFEB28", CLOCK, "error")
        self.assertEqual(result, datetime(2028, 2, 29, 12, tzinfo=timezone.utc))

    def test_error_only_checked_in_resolve(self):
        """Test that validation is range-only, so a 31st of November is valid."""
        validate("310000ZNOV26")

    def test_unknown_option(self):
        with self.assertRaises(ValueError):
            parse_datetime("010000Z", CLOCK, "clamp")


class TestResolve(unittest.TestCase):
    def test_resolve_fields(self):
        """Test resolving fields that were built directly rather than parsed."""
        fields = DTGFields(1, 2, 3, TimeZoneLetter.K, Month.MAR, 2030)
        self.assertEqual(resolve(fields, CLOCK), datetime(2030, 3, 1, 2, 3, tzinfo=timezone(timedelta(hours=10))))

    def test_resolve_year_from_clock(self):
        fields = DTGFields(1, 2, 3, TimeZoneLetter.Z, Month.MAR)
        self.assertEqual(resolve(fields, CLOCK).year, 2026)


# Combinations of (day, hour, minute, month, year) fields, all of which are valid
VALID_FIELDS = [
    (),
    ("15",),
    ("15", "20"),
    ("10", "19", "11"),
    ("09", "02", "01", "OCT"),
    ("03", "23", "31", "SEP", "06"),
    ("",),
    ("15", ""),
    ("", ""),
    ("15", "", "20"),
    ("", "13", "21"),
    ("", "", "21"),
    ("", "", ""),
    ("", "", "", ""),
    ("", "", "", "MAR"),
    ("", "", "", "", ""),
    ("", "", "", "mar", "27"),
]

LETTER_OFFSETS = [
    ("Z", 0),
    ("N", -HOUR),
    ("O", -2 * HOUR),
    ("W", -10 * HOUR),
    ("Y", -12 * HOUR),
    ("K", 10 * HOUR),
    ("L", 11 * HOUR),
    ("M", 12 * HOUR),
    ("D", 4 * HOUR),
    ("d", 4 * HOUR),
]


class TestGetNumericTimeZone(unittest.TestCase):
    @parameterized.expand([
        (letter, fields, offset) for letter, offset in LETTER_OFFSETS + [("J", HOUR)] for fields in VALID_FIELDS
    ])
    def test_offset(self, letter, fields, expected):
        """Test the offset of letters, with any combination of valid fields."""
        zone = get_numeric_time_zone(letter, *fields, clock=CLOCK)
        self.assertEqual(zone.utcoffset(None), timedelta(seconds=expected))

    def test_name(self):
        """Test that the zone is labelled with the numeric offset."""
        self.assertEqual(get_numeric_time_zone("R", clock=CLOCK).tzname(None), "-0500")

    def test_local_system_clock(self):
        """Test that J without any fields is the current offset of the process's local time zone."""
        zone = get_numeric_time_zone("J")
        self.assertEqual(zone.utcoffset(None), datetime.now().astimezone().utcoffset())

    @parameterized.expand([
        ("winter date", ("15", "12", "00", "JAN", "27"), timedelta(0)),
        ("summer date", ("15", "12", "00", "JUL", "27"), timedelta(hours=1)),
        ("month only", ("", "", "", "FEB"), timedelta(0)),
        ("no fields", (), timedelta(0)),
    ])
    def test_local_uses_fields(self, _, fields, expected):
        """Test that the local offset of J is for the date given by the fields."""
        clock = SeasonalClock(datetime(2026, 12, 1, tzinfo=timezone.utc))
        zone = get_numeric_time_zone("J", *fields, clock=clock)
        self.assertEqual(zone.utcoffset(None), expected)

    @parameterized.expand([
        ("multiple letters", "AB", ()),
        ("non-ascii", "Ö", ()),
        ("empty", "", ()),
        ("digit", "1", ("15",)),
    ])
    def test_unknown_letter(self, _, letter, fields):
        with self.assertRaises(UnknownLetterError):
            get_numeric_time_zone(letter, *fields, clock=CLOCK)

    @parameterized.expand([
        ("short day", ("1",), InvalidFormatError),
        ("letters in hour", ("15", "ab"), InvalidFormatError),
        ("long minute", ("15", "10", "100"), InvalidFormatError),
        ("short year", ("15", "10", "10", "OCT", "6"), InvalidFormatError),
        ("too many fields", ("", "", "", "", "", ""), InvalidFormatError),
        ("day 32", ("32",), FieldRangeError),
        ("hour 24", ("15", "24"), FieldRangeError),
        ("minute 60", ("15", "10", "60"), FieldRangeError),
        ("unknown month", ("15", "10", "10", "FXB"), UnknownMonthError),
        ("unknown month alone", ("", "", "", "XYZ"), UnknownMonthError),
    ])
    def test_malformed_fields(self, _, fields, error):
        """Test that malformed fields are rejected, for fixed letters as well as J."""
        for letter in ("Z", "J"):
            with self.assertRaises(error):
                get_numeric_time_zone(letter, *fields, clock=CLOCK)
