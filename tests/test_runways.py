"""Tests for runway group decoding."""

import unittest

from wxdecode.runways import (
    RunwayDesignator,
    Tendency,
    parse_runway_state,
    parse_visual_range,
    parse_wind_shear,
)
from wxdecode.visibility import DistanceUnit


class TestRunwayDesignator(unittest.TestCase):
    """Test runway designator codes."""

    def test_plain_code(self):
        """Test codes kept as reported."""
        self.assertEqual(RunwayDesignator.from_code("06R").number, "06R")
        self.assertEqual(RunwayDesignator.from_code("24").number, "24")
        self.assertEqual(RunwayDesignator.from_code("99").number, "99")

    def test_parallel_runway_code(self):
        """Test 51-86 address the right-hand parallel runway."""
        self.assertEqual(RunwayDesignator.from_code("74").number, "24R")
        self.assertEqual(RunwayDesignator.from_code("51").number, "01R")
        self.assertEqual(RunwayDesignator.from_code("86").number, "36R")

    def test_all_runways_code(self):
        """Test 88 means all runways."""
        self.assertTrue(RunwayDesignator.from_code("88").all_runways)
        self.assertFalse(RunwayDesignator.from_code("24").all_runways)


class TestVisualRange(unittest.TestCase):
    """Test runway visual range parser."""

    def test_parse_above_max(self):
        """Test P flag."""
        rvr, used = parse_visual_range(["R24/P2000"], 0)

        self.assertEqual(used, 1)
        self.assertEqual(rvr.runway.number, "24")
        self.assertEqual(rvr.distance.value, 2000)
        self.assertTrue(rvr.above_max)
        self.assertIsNone(rvr.tendency)

    def test_parse_below_min(self):
        """Test M flag."""
        rvr, _ = parse_visual_range(["R25/M0075"], 0)

        self.assertTrue(rvr.below_min)
        self.assertEqual(rvr.distance.meters(), 75)

    def test_parse_tendency(self):
        """Test tendency suffix."""
        rvr, _ = parse_visual_range(["R16R/1000U"], 0)

        self.assertEqual(rvr.runway.number, "16R")
        self.assertEqual(rvr.tendency, Tendency.UP)

    def test_parse_variation(self):
        """Test variation up to a second value."""
        rvr, _ = parse_visual_range(["R27/0150V0300U"], 0)

        self.assertEqual(rvr.distance.value, 150)
        self.assertEqual(rvr.upto_distance.value, 300)
        self.assertEqual(rvr.tendency, Tendency.UP)

    def test_parse_feet(self):
        """Test values in feet."""
        rvr, _ = parse_visual_range(["R09/1200FT/D"], 0)

        self.assertEqual(rvr.distance.unit, DistanceUnit.FT)
        self.assertEqual(rvr.distance.meters(), 370)
        self.assertEqual(rvr.tendency, Tendency.DOWN)

    def test_not_visual_range(self):
        """Test runway state groups are not visual ranges."""
        self.assertIsNone(parse_visual_range(["R02/010070"], 0))
        self.assertIsNone(parse_visual_range(["9999"], 0))


class TestRunwayState(unittest.TestCase):
    """Test runway state parser."""

    def test_parse_full_state(self):
        """Test all four state fields."""
        state, used = parse_runway_state(["R24L/451293"], 0)

        self.assertEqual(used, 1)
        self.assertEqual(state.runway.number, "24L")
        self.assertEqual(state.coverage_type, 4)
        self.assertEqual(state.coverage_dimension, 5)
        self.assertEqual(state.coverage_height, 12)
        self.assertEqual(state.braking, 93)
        self.assertFalse(state.cleared)

    def test_parse_parallel_runway_with_placeholder(self):
        """Test runway code remapping and a / placeholder."""
        state, _ = parse_runway_state(["R74/4/1293"], 0)

        self.assertEqual(state.runway.number, "24R")
        self.assertEqual(state.coverage_type, 4)
        self.assertIsNone(state.coverage_dimension)
        self.assertTrue(state.coverage_dimension_not_defined)
        self.assertEqual(state.coverage_height, 12)
        self.assertEqual(state.braking, 93)

    def test_parse_cleared(self):
        """Test CLRD runway."""
        state, _ = parse_runway_state(["R25/CLRD70"], 0)

        self.assertEqual(state.runway.number, "25")
        self.assertTrue(state.cleared)
        self.assertEqual(state.braking, 70)
        self.assertIsNone(state.coverage_type)
        self.assertIsNone(state.coverage_dimension)
        self.assertIsNone(state.coverage_height)

    def test_parse_cleared_short_form(self):
        """Test the braking-only form with D suffix."""
        state, _ = parse_runway_state(["R31/70D"], 0)

        self.assertTrue(state.cleared)
        self.assertEqual(state.braking, 70)

    def test_parse_not_defined(self):
        """Test every field as a placeholder."""
        state, _ = parse_runway_state(["R88//////"], 0)

        self.assertTrue(state.runway.all_runways)
        self.assertTrue(state.coverage_type_not_defined)
        self.assertTrue(state.coverage_dimension_not_defined)
        self.assertTrue(state.coverage_height_not_defined)
        self.assertTrue(state.braking_not_defined)

    def test_parse_snow_closed(self):
        """Test closed-by-snow tokens."""
        state, _ = parse_runway_state(["R/SNOCLO"], 0)
        self.assertTrue(state.snow_closed)
        self.assertIsNone(state.runway)

        state, _ = parse_runway_state(["R24/SNOCLO"], 0)
        self.assertTrue(state.snow_closed)
        self.assertEqual(state.runway.number, "24")

    def test_not_runway_state(self):
        """Test visual ranges are not runway states."""
        self.assertIsNone(parse_runway_state(["R24/P2000"], 0))


class TestWindShear(unittest.TestCase):
    """Test wind shear parser."""

    def test_parse_all_runways(self):
        """Test WS ALL RWY."""
        runway, used = parse_wind_shear(["WS", "ALL", "RWY"], 0)

        self.assertEqual(used, 3)
        self.assertTrue(runway.all_runways)

    def test_parse_single_runway(self):
        """Test WS with one runway."""
        runway, used = parse_wind_shear(["WS", "R06R"], 0)
        self.assertEqual(used, 2)
        self.assertEqual(runway.number, "06R")

        runway, used = parse_wind_shear(["WS", "RWY24"], 0)
        self.assertEqual(used, 2)
        self.assertEqual(runway.number, "24")

    def test_not_wind_shear(self):
        """Test incomplete groups are rejected."""
        self.assertIsNone(parse_wind_shear(["WS"], 0))
        self.assertIsNone(parse_wind_shear(["WS", "ALL"], 0))
        self.assertIsNone(parse_wind_shear(["WS", "9999"], 0))
