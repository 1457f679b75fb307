"""Tests for the main-body decoder."""

import unittest
from datetime import datetime, timezone

from wxdecode.body import (
    BodyKind,
    PressureUnit,
    decode_body,
    parse_pressure,
    parse_temperature,
    parse_temperature_forecast,
)
from wxdecode.context import DecodeContext


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


class TestFieldParsers(unittest.TestCase):
    """Test temperature and pressure parsers."""

    def setUp(self):
        self.context = DecodeContext(year=2019, month=5, day=17)

    def test_parse_temperature(self):
        """Test temperature/dew point, including negatives."""
        self.assertEqual(parse_temperature(["17/11"], 0), ((17, 11), 1))
        self.assertEqual(parse_temperature(["M17/M11"], 0), ((-17, -11), 1))
        self.assertEqual(parse_temperature(["05/M01"], 0), ((5, -1), 1))
        self.assertIsNone(parse_temperature(["1709/1809"], 0))

    def test_parse_pressure(self):
        """Test hPa and inHg pressure groups."""
        pressure, _ = parse_pressure(["Q1018"], 0)
        self.assertEqual(pressure.unit, PressureUnit.HPA)
        self.assertEqual(pressure.hpa(), 1018)
        self.assertAlmostEqual(pressure.inhg(), 30.06, places=2)
        self.assertEqual(pressure.mmhg(), 764)

        pressure, _ = parse_pressure(["A3006"], 0)
        self.assertEqual(pressure.unit, PressureUnit.INHG)
        self.assertAlmostEqual(pressure.value, 30.06)
        self.assertEqual(pressure.hpa(), 1018)

        self.assertIsNone(parse_pressure(["Q101"], 0))

    def test_parse_temperature_forecast(self):
        """Test forecast maximum and minimum."""
        issue_time = utc(2019, 5, 17, 8)
        maximum, used = parse_temperature_forecast(["TX21/1712Z"], 0, self.context, issue_time)
        self.assertEqual(used, 1)
        self.assertEqual(maximum.temperature, 21)
        self.assertTrue(maximum.is_max)
        self.assertEqual(maximum.time, utc(2019, 5, 17, 12))

        minimum, _ = parse_temperature_forecast(["TNM07/1802Z"], 0, self.context, issue_time)
        self.assertEqual(minimum.temperature, -7)
        self.assertTrue(minimum.is_min)
        self.assertEqual(minimum.time, utc(2019, 5, 18, 2))

    def test_temperature_forecast_month_rollover(self):
        """Test a day before the issue day falls in the next month."""
        context = DecodeContext(year=2019, month=5, day=30)
        forecast, _ = parse_temperature_forecast(["TX05/0112Z"], 0, context, utc(2019, 5, 30, 8))

        self.assertEqual(forecast.time, utc(2019, 6, 1, 12))


class TestDecodeBody(unittest.TestCase):
    """Test decode_body."""

    def setUp(self):
        self.context = DecodeContext(year=2019, month=5, day=27)

    def test_observation_body(self):
        """Test a complete observation body."""
        tokens = "22003MPS 9999 VCFG VV/// 17/11 Q1018 R02/010070 NOSIG".split()
        body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertEqual(body.wind.direction, 220)
        self.assertEqual(body.visibility.distance.value, 9999)
        self.assertEqual(len(body.phenomena), 1)
        self.assertEqual(body.phenomena[0].code, "FG")
        self.assertTrue(body.vertical_visibility.not_defined)
        self.assertEqual(body.temperature, 17)
        self.assertEqual(body.dewpoint, 11)
        self.assertEqual(body.relative_humidity(), 68)
        self.assertEqual(body.pressure.hpa(), 1018)
        self.assertEqual(body.runway_states[0].runway.number, "02")
        self.assertEqual(body.runway_states[0].coverage_dimension, 1)
        self.assertEqual(body.runway_states[0].braking, 70)
        self.assertTrue(body.nosig)
        self.assertEqual(body.not_decoded_tokens, ())

    def test_repeated_groups(self):
        """Test repeatable groups are collected in order."""
        tokens = "3100 -SHRA BR BKN005 OVC020CB".split()
        body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertEqual([p.code for p in body.phenomena], ["SHRA", "BR"])
        self.assertEqual([c.height for c in body.clouds], [5, 20])
        self.assertTrue(body.clouds[1].cumulonimbus)

    def test_cavok_suppresses_visibility_and_clouds(self):
        """Test visibility, weather and cloud steps are skipped after CAVOK."""
        tokens = "22003MPS CAVOK 9999 BKN020 17/11".split()
        body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertTrue(body.cavok)
        self.assertIsNone(body.visibility)
        self.assertEqual(body.clouds, ())
        self.assertEqual(body.temperature, 17)
        self.assertEqual(body.not_decoded_tokens, ("9999", "BKN020"))

    def test_out_of_order_groups(self):
        """Test a group after a later step is still found on the next pass."""
        tokens = "17/11 22003MPS".split()
        body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertEqual(body.temperature, 17)
        self.assertEqual(body.wind.speed, 3)
        self.assertEqual(body.not_decoded_tokens, ())

    def test_unknown_token_skipped(self):
        """Test an unknown token is recorded and decoding continues."""
        tokens = "22003MPS CAVOK END M17/M11 Q1018".split()
        with self.assertLogs("wxdecode.body", level="DEBUG") as logs:
            body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertEqual(body.not_decoded_tokens, ("END",))
        self.assertEqual(body.temperature, -17)
        self.assertEqual(body.pressure.hpa(), 1018)
        self.assertTrue(any("END" in line for line in logs.output))

    def test_observation_only_groups(self):
        """Test groups only decoded in observations."""
        tokens = "R24/P2000 // VV100 M17/M11 A3006 RESN WS ALL RWY".split()
        body = decode_body(tokens, BodyKind.OBSERVATION, self.context)

        self.assertEqual(body.runway_visual_ranges[0].runway.number, "24")
        self.assertTrue(body.phenomena_not_observed)
        self.assertEqual(body.vertical_visibility.height, 100)
        self.assertEqual(body.pressure.unit, PressureUnit.INHG)
        self.assertEqual(body.recent_phenomena[0].code, "SN")
        self.assertTrue(body.wind_shear[0].all_runways)
        self.assertEqual(body.not_decoded_tokens, ())

        trend = decode_body(["R24/P2000", "NOSIG"], BodyKind.TREND, self.context)
        self.assertEqual(trend.runway_visual_ranges, ())
        self.assertFalse(trend.nosig)
        self.assertEqual(trend.not_decoded_tokens, ("R24/P2000", "NOSIG"))

    def test_forecast_body(self):
        """Test forecast bodies take temperature extremes, not observed temperature."""
        context = DecodeContext(year=2019, month=5, day=17)
        tokens = "02003MPS 0700 FG BKN003 TX21/1712Z TNM07/1802Z 17/11".split()
        body = decode_body(tokens, BodyKind.FORECAST, context, utc(2019, 5, 17, 8))

        self.assertEqual(body.visibility.distance.value, 700)
        self.assertEqual(len(body.temperature_forecasts), 2)
        self.assertEqual(body.temperature_forecasts[1].temperature, -7)
        self.assertIsNone(body.temperature)
        self.assertEqual(body.not_decoded_tokens, ("17/11",))

    def test_empty_body(self):
        """Test an empty token list."""
        body = decode_body([], BodyKind.OBSERVATION, self.context)

        self.assertIsNone(body.wind)
        self.assertEqual(body.not_decoded_tokens, ())
