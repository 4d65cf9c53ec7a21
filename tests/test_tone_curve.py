"""Tests for the AfterShot tone curve codecs."""

import logging

import pytest

from lightroom2aftershot.core.tone_curve import (
    CombinedToneCurve,
    ToneCurveChannel,
    scale_points,
)


class TestToneCurveChannel:
    """Test serialization of a single curve channel."""

    @pytest.mark.parametrize("capacity", [2, 5, 20])
    def test_points_padded_to_capacity(self, capacity: int) -> None:
        """Test that the slot list is exactly capacity long and zero padded."""
        channel = ToneCurveChannel([(0, 10), (100, 200)])
        slots = channel.serialize_points_in(capacity).split(",")
        assert len(slots) == capacity
        assert slots[:2] == ["0", "100"]
        assert all(slot == "0" for slot in slots[2:])

    def test_points_out(self) -> None:
        """Test that the output axis uses the second value of each point."""
        channel = ToneCurveChannel([(0, 4626), (10023, 7196), (65535, 61680)])
        assert channel.serialize_points_out(5) == "4626,7196,61680,0,0"

    @pytest.mark.parametrize("points", [[], [(1000, 2000)]])
    def test_default_curve(self, points: list[tuple[int, int]]) -> None:
        """Test that fewer than 2 points serialize as the identity curve."""
        channel = ToneCurveChannel(points)
        expected = ",".join(["0", "65535"] + ["0"] * 18)
        assert channel.serialize_points_in(20) == expected
        assert channel.serialize_points_out(20) == expected
        assert channel.serialize_point_count() == "2"

    def test_point_count(self) -> None:
        """Test the point count of a regular curve."""
        channel = ToneCurveChannel([(0, 0), (10, 20), (30, 40), (65535, 65535)])
        assert channel.serialize_point_count() == "4"

    def test_too_many_points(self) -> None:
        """Test that points beyond the capacity are dropped."""
        channel = ToneCurveChannel([(i, i) for i in range(25)])
        slots = channel.serialize_points_in(20).split(",")
        assert slots == [str(i) for i in range(20)]
        assert channel.serialize_point_count(20) == "20"

    def test_unrepresentable_value(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that a non-integer value becomes 0 instead of raising."""
        channel = ToneCurveChannel([(0, 0), ("abc", 5), (65535, 65535)])  # type: ignore[list-item]
        with caplog.at_level(logging.WARNING):
            assert channel.serialize_points_in(4) == "0,0,65535,0"
        assert "'abc' is not an integer" in caplog.text


class TestScalePoints:
    """Test scaling from the Lightroom to the AfterShot range."""

    def test_scale(self) -> None:
        """Test that points are multiplied by 65535 // 255."""
        assert scale_points([(0, 18), (39, 28), (255, 240)]) == [
            (0, 4626),
            (10023, 7196),
            (65535, 61680),
        ]

    def test_empty(self) -> None:
        assert scale_points([]) == []


class TestCombinedToneCurve:
    """Test the four channel curve attributes."""

    @pytest.fixture
    def curve(self) -> CombinedToneCurve:
        return CombinedToneCurve.from_lightroom(
            {
                "rgb": [(0, 18), (39, 28), (255, 240)],
                "green": [(0, 0), (128, 140), (255, 255)],
            }
        )

    def test_point_count_attribute(self, curve: CombinedToneCurve) -> None:
        """Test the header and the channel order of the point counts."""
        value = curve.serialize_point_count()
        assert value == "4,1,3,2,3,2"
        assert len(value.split(",")[2:]) == 4

    def test_points_in_attribute(self, curve: CombinedToneCurve) -> None:
        """Test the combined channel comes first after the header."""
        slots = curve.serialize_points_in().split(",")
        assert slots[:2] == ["4", "20"]
        assert len(slots) == 2 + 4 * 20
        assert ",".join(slots[2:5]) == "0,10023,65535"
        assert all(slot == "0" for slot in slots[5:22])
        # Red has no points and falls back to the default curve.
        assert slots[22:24] == ["0", "65535"]
        # Green.
        assert slots[42:45] == ["0", "32896", "65535"]

    def test_points_out_attribute(self, curve: CombinedToneCurve) -> None:
        slots = curve.serialize_points_out().split(",")
        assert slots[2:5] == ["4626", "7196", "61680"]

    def test_to_attributes(self, curve: CombinedToneCurve) -> None:
        """Test the eight curve attributes and the fixed black/white points."""
        attributes = curve.to_attributes()
        assert list(attributes) == [
            "bopt:curves_m_cn",
            "bopt:curves_m_cx",
            "bopt:curves_m_cy",
            "bopt:curves_m_olo",
            "bopt:curves_m_ohi",
            "bopt:curves_m_ilo",
            "bopt:curves_m_imid",
            "bopt:curves_m_ihi",
        ]
        assert attributes["bopt:curves_m_olo"] == "4,1,0,0,0,0"
        assert attributes["bopt:curves_m_ohi"] == "4,1,65535,65535,65535,65535"
        assert attributes["bopt:curves_m_ilo"] == "4,1,0,0,0,0"
        assert attributes["bopt:curves_m_imid"] == "4,1,1,1,1,1"
        assert attributes["bopt:curves_m_ihi"] == "4,1,65535,65535,65535,65535"

    def test_custom_capacity(self, curve: CombinedToneCurve) -> None:
        """Test that the header carries the capacity."""
        value = curve.serialize_points_in(4)
        assert value.startswith("4,4,0,10023,65535,0,")
        assert len(value.split(",")) == 2 + 4 * 4

    def test_check(self) -> None:
        """Test that an oversized channel is reported once, by its Lightroom name."""
        curve = CombinedToneCurve.from_lightroom(
            {"rgb": [(i, i) for i in range(25)], "blue": [(0, 0), (255, 255)]}
        )
        diagnostics = curve.check(20)
        assert len(diagnostics) == 1
        assert diagnostics[0].level == logging.WARNING
        assert diagnostics[0].field == "ToneCurvePV2012"
        assert "only the first 20 are kept" in diagnostics[0].message
        assert curve.check(25) == []

    def test_empty_curve(self) -> None:
        """Test that an empty curve produces four default channels."""
        curve = CombinedToneCurve()
        assert curve.serialize_point_count() == "4,1,2,2,2,2"
        default = ",".join(["0", "65535"] + ["0"] * 18)
        assert curve.serialize_points_in() == ",".join(["4", "20"] + [default] * 4)
