"""Tests for wind group decoding."""

import unittest

from wxdecode.wind import SpeedUnit, parse_wind


class TestWind(unittest.TestCase):
    """Test wind parser."""

    def test_parse_simple_wind(self):
        """Test parsing a plain wind group."""
        wind, used = parse_wind(["22003MPS"], 0)

        self.assertEqual(used, 1)
        self.assertEqual(wind.direction, 220)
        self.assertEqual(wind.speed, 3)
        self.assertEqual(wind.unit, SpeedUnit.MPS)
        self.assertIsNone(wind.gust)
        self.assertFalse(wind.variable)

    def test_parse_variable_sector(self):
        """Test the variable direction sector is consumed with the wind."""
        wind, used = parse_wind(["22003MPS", "180V250", "5000"], 0)

        self.assertEqual(used, 2)
        self.assertEqual(wind.variable_from, 180)
        self.assertEqual(wind.variable_to, 250)

    def test_parse_variable_direction(self):
        """Test VRB direction."""
        wind, _ = parse_wind(["VRB01MPS"], 0)

        self.assertTrue(wind.variable)
        self.assertIsNone(wind.direction)
        self.assertIsNone(wind.direction_cardinal())

    def test_parse_gust_knots(self):
        """Test gusts and knot conversion."""
        wind, _ = parse_wind(["04008G20KT"], 0)

        self.assertEqual(wind.unit, SpeedUnit.KT)
        self.assertEqual(wind.gust, 20)
        self.assertEqual(wind.speed_kt(), 8)
        self.assertEqual(wind.speed_mps(), 4)
        self.assertEqual(wind.gust_mps(), 10)

    def test_parse_not_reported(self):
        """Test missing direction and speed."""
        wind, _ = parse_wind(["/////KT"], 0)

        self.assertTrue(wind.direction_not_reported)
        self.assertTrue(wind.speed_not_reported)
        self.assertIsNone(wind.direction)

    def test_parse_above_max(self):
        """Test P prefix on speed."""
        wind, _ = parse_wind(["240P49MPS"], 0)

        self.assertTrue(wind.above_max)
        self.assertEqual(wind.speed, 49)

    def test_speed_conversion(self):
        """Test speeds are converted on demand."""
        wind, _ = parse_wind(["22003MPS"], 0)
        self.assertEqual(wind.speed_kt(), 6)
        self.assertEqual(wind.direction_cardinal(), "SW")

        wind, _ = parse_wind(["18036KMH"], 0)
        self.assertEqual(wind.unit, SpeedUnit.KMH)
        self.assertEqual(wind.speed_mps(), 10)

    def test_not_a_wind_group(self):
        """Test non-wind tokens are rejected."""
        self.assertIsNone(parse_wind(["9999"], 0))
        self.assertIsNone(parse_wind(["22003"], 0))
        self.assertIsNone(parse_wind([], 0))
