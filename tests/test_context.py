"""Tests for the decode reference date."""

import unittest
from datetime import date, datetime, timezone

from pydantic import ValidationError

from wxdecode.context import DecodeContext, add_month


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestDecodeContext(unittest.TestCase):
    """Test DecodeContext."""

    def setUp(self):
        self.context = DecodeContext(year=2019, month=5, day=17)

    def test_resolve_day_time(self):
        """Test resolving a day/hour/minute in the context month."""
        self.assertEqual(self.context.resolve_day_time(17, 8), utc(2019, 5, 17, 8))
        self.assertEqual(self.context.resolve_day_time(5, 20, 30), utc(2019, 5, 5, 20, 30))

    def test_hour_24_is_next_midnight(self):
        """Test hour 24 rolls over to the following day."""
        self.assertEqual(self.context.resolve_day_time(17, 24), utc(2019, 5, 18))
        self.assertEqual(self.context.resolve_day_time(31, 24), utc(2019, 6, 1))
        self.assertEqual(self.context.resolve_clock_time(24, 0), utc(2019, 5, 18))

    def test_resolve_clock_time(self):
        """Test clock times fall on the context day."""
        self.assertEqual(self.context.resolve_clock_time(12, 30), utc(2019, 5, 17, 12, 30))

    def test_invalid_values_return_none(self):
        """Test impossible timestamps are logged and give None."""
        context = DecodeContext(year=2019, month=6, day=1)
        with self.assertLogs("wxdecode.context", level="WARNING"):
            self.assertIsNone(context.resolve_day_time(31, 10))
        with self.assertLogs("wxdecode.context", level="WARNING"):
            self.assertIsNone(context.resolve_day_time(25, 26))

    def test_invalid_context_rejected(self):
        """Test an impossible reference date is a validation error."""
        with self.assertRaises(ValidationError):
            DecodeContext(year=2019, month=2, day=30)

    def test_context_is_frozen(self):
        """Test the context cannot be changed after construction."""
        with self.assertRaises(ValidationError):
            self.context.day = 18

    def test_from_date(self):
        """Test building a context from a date."""
        context = DecodeContext.from_date(date(2020, 2, 29))
        self.assertEqual(context.as_date(), date(2020, 2, 29))
        self.assertIsInstance(DecodeContext.today(), DecodeContext)

    def test_add_month(self):
        """Test moving a timestamp into the following month."""
        self.assertEqual(add_month(utc(2019, 5, 1)), utc(2019, 6, 1))
        self.assertEqual(add_month(utc(2019, 12, 5, 6)), utc(2020, 1, 5, 6))
        with self.assertLogs("wxdecode.context", level="WARNING"):
            self.assertIsNone(add_month(utc(2019, 1, 31)))
