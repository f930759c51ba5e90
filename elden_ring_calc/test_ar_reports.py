"""
Unit tests for ar_reports.py and scaling_charts.py - DataFrame reports and plotly figures.
"""
import pytest

from core import Stat, PlayerStats, calculate_ar_at_level
from aow_data import AowCalculatorInput
from aow_calculator import calculate_aow_damage
from ar_reports import ar_breakdown_frame, aow_attacks_frame, curve_series_frame, ar_by_stat_frame
from scaling_charts import create_curve_chart, create_ar_by_stat_chart


class TestBreakdownFrame:
    """Tests for ar_breakdown_frame."""

    def test_one_row_per_damage_type(self, weapon_data):
        result = calculate_ar_at_level(weapon_data, "Test Sword", "Standard", 0,
                                       PlayerStats(strength=40, dexterity=20))
        frame = ar_breakdown_frame(result)
        assert list(frame["Type"]) == ["Physical", "Magic", "Fire", "Lightning", "Holy"]
        physical = frame.iloc[0]
        assert physical["Total"] == pytest.approx(126)
        assert physical["Rounded"] == 126
        assert physical["STR"] == pytest.approx(20)
        assert physical["STR Grade"] == "D"
        assert frame.iloc[1]["Total"] == 0


class TestAowAttacksFrame:
    """Tests for aow_attacks_frame."""

    def test_columns_and_rows(self, aow_data, weapon_data):
        result = calculate_aow_damage(aow_data, weapon_data, AowCalculatorInput(
            weapon_name="Test Sword", affinity="Standard", upgrade_level=0,
            weapon_class="Straight Sword", aow_name="Spinning Slash",
            stats=PlayerStats(strength=40, dexterity=20),
        ))
        frame = aow_attacks_frame(result)
        assert list(frame.columns[:6]) == ["Attack", "Physical", "Magic", "Fire", "Lightning", "Holy"]
        assert "Shield Chip" in frame.columns
        assert len(frame) == 2
        assert frame.iloc[0]["Physical"] == pytest.approx(151.2)
        assert frame["Magic"].isna().all()

    def test_error_result_is_empty(self, aow_data, weapon_data):
        result = calculate_aow_damage(aow_data, weapon_data, AowCalculatorInput(
            weapon_name="Test Sword", affinity="Standard", upgrade_level=0,
            weapon_class="Straight Sword", aow_name="Nope",
        ))
        frame = aow_attacks_frame(result)
        assert frame.empty
        assert "Attack" in frame.columns


class TestCurveFrame:
    """Tests for curve_series_frame."""

    def test_levels(self, curve_table):
        frame = curve_series_frame(curve_table, 0, range(1, 5))
        assert list(frame["Level"]) == [1, 2, 3, 4]
        assert frame.iloc[3]["Value"] == pytest.approx(4)
        assert frame.iloc[3]["Saturation"] == pytest.approx(0.04)

    def test_default_range(self, curve_table):
        frame = curve_series_frame(curve_table, 1)
        assert len(frame) == 99


class TestArByStatFrame:
    """Tests for ar_by_stat_frame."""

    def test_strength_sweep(self, weapon_data):
        frame = ar_by_stat_frame(weapon_data, "Test Sword", "Standard", 0,
                                 PlayerStats(dexterity=20), Stat.STRENGTH, levels=[12, 40])
        assert list(frame["Level"]) == [12, 40]
        assert frame.iloc[0]["Physical"] == pytest.approx(112)
        assert frame.iloc[1]["Total"] == pytest.approx(126)

    def test_miss_is_empty(self, weapon_data):
        frame = ar_by_stat_frame(weapon_data, "Nope", "Standard", 0, PlayerStats(), Stat.STRENGTH)
        assert frame.empty
        assert "Total" in frame.columns


class TestCharts:
    """Tests for the plotly figures."""

    def test_curve_chart(self, curve_table):
        fig = create_curve_chart(curve_series_frame(curve_table, 1), 1)
        assert len(fig.data) == 1
        assert fig.layout.title.text == "Curve 1"

    def test_ar_chart_skips_empty_types(self, weapon_data):
        frame = ar_by_stat_frame(weapon_data, "Test Sword", "Standard", 0,
                                 PlayerStats(dexterity=20), Stat.STRENGTH)
        fig = create_ar_by_stat_chart(frame, "Strength")
        assert [trace.name for trace in fig.data] == ["Physical", "Total"]
        assert fig.data[-1].line.dash == "dash"
        assert fig.layout.title.text == "Attack Rating by Strength"

    def test_ar_chart_stacks_split_damage(self, weapon_data):
        frame = ar_by_stat_frame(weapon_data, "Test Sword", "Magic", 0,
                                 PlayerStats(intelligence=40), Stat.INTELLIGENCE, levels=range(10, 20))
        fig = create_ar_by_stat_chart(frame, "Intelligence")
        assert [trace.name for trace in fig.data] == ["Physical", "Magic", "Total"]
