"""
Unit tests for aow_formulas.py - PWU, bullet/motion channels, stamina, poise, shield chip, rounding.
"""
import pytest

from core import Stat, STATS, DamageTypeResult, StatScalingResult
from aow_formulas import (
    compute_pwu,
    compute_pwu_multiplier,
    compute_scaling_contribution,
    compute_scaling_with_reinforce,
    compute_bullet_damage,
    compute_bullet_damage_no_scaling,
    compute_motion_damage,
    compute_stat_point_bonus,
    compute_total_stat_point_bonus,
    compute_stamina_damage,
    compute_poise_damage,
    compute_shield_chip,
    round_to,
    round_to_2_decimals,
    round_to_3_decimals,
    round_to_4_decimals,
)


class TestPwu:
    """Tests for the percent weapon upgrade ramp."""

    def test_pwu(self):
        assert compute_pwu(0, 25) == 0
        assert compute_pwu(25, 25) == 1
        assert compute_pwu(10, 0) == 0

    def test_multiplier_boundaries(self):
        """1.0 at +0 and 4.0 at max for both upgrade paths."""
        assert compute_pwu_multiplier(0, 25) == 1.0
        assert compute_pwu_multiplier(25, 25) == 4.0
        assert compute_pwu_multiplier(0, 10) == 1.0
        assert compute_pwu_multiplier(10, 10) == 4.0

    def test_multiplier_midway(self):
        assert compute_pwu_multiplier(10, 25) == pytest.approx(2.2)

    def test_unupgradable_weapon(self):
        assert compute_pwu_multiplier(0, 0) == 1.0


class TestDamageChannels:
    """Tests for bullet and motion damage."""

    def test_bullet_with_scaling(self):
        assert compute_bullet_damage(50, 4.0, 0.75) == pytest.approx(350)

    def test_bullet_without_flat_is_zero(self):
        assert compute_bullet_damage(0, 4.0, 0.75) == 0
        assert compute_bullet_damage_no_scaling(0, 4.0) == 0

    def test_bullet_no_scaling(self):
        assert compute_bullet_damage_no_scaling(30, 2.2) == pytest.approx(66)

    def test_scaling_contribution(self):
        assert compute_scaling_contribution(150, 0.5) == pytest.approx(0.75)
        assert compute_scaling_with_reinforce(100, 1.5) == pytest.approx(150)

    def test_motion(self):
        assert compute_motion_damage(126, 1.2) == pytest.approx(151.2)
        assert compute_motion_damage(126, 0) == 0


class TestStatPointBonus:
    """Tests for temporary stat point bonuses."""

    def test_single_stat(self):
        assert compute_stat_point_bonus(100, 0.4, 10) == pytest.approx(4)

    @pytest.mark.parametrize("base,saturation,points", [(0, 0.4, 10), (100, 0, 10), (100, 0.4, 0)])
    def test_zero_inputs(self, base, saturation, points):
        assert compute_stat_point_bonus(base, saturation, points) == 0

    def test_only_scaling_stats_count(self):
        per_stat = {stat: StatScalingResult() for stat in STATS}
        per_stat[Stat.STRENGTH] = StatScalingResult(saturation=0.4, scaling=20, raw_scaling=50)
        damage_type = DamageTypeResult(base=100, scaling=20, total=120, rounded=120, per_stat=per_stat)
        bonus = {Stat.STRENGTH: 10, Stat.DEXTERITY: 10}
        assert compute_total_stat_point_bonus(damage_type, bonus) == pytest.approx(4)

    def test_no_bonus(self):
        assert compute_total_stat_point_bonus(DamageTypeResult(base=100), None) == 0
        assert compute_total_stat_point_bonus(DamageTypeResult(), {Stat.STRENGTH: 10}) == 0


class TestStaminaPoiseChip:
    """Tests for stamina, poise and shield chip."""

    def test_stamina(self):
        assert compute_stamina_damage(20, 1.1, 1.0, 5) == pytest.approx(27)

    def test_poise(self):
        assert compute_poise_damage(15, 1.0, 1.5, 0) == pytest.approx(22.5)

    def test_shield_chip(self):
        assert compute_shield_chip(-30) == pytest.approx(0.3)
        assert round_to_4_decimals(compute_shield_chip(-20)) == 0.2

    def test_no_shield_chip(self):
        assert compute_shield_chip(0) == 0


class TestRounding:
    """Half-up rounding, ties toward +infinity."""

    def test_ties_go_up(self):
        assert round_to(0.125, 2) == 0.13
        assert round_to(2.5, 0) == 3

    def test_negative_ties_go_toward_positive(self):
        assert round_to(-0.125, 2) == -0.12
        assert round_to(-2.5, 0) == -2

    def test_helpers(self):
        assert round_to_3_decimals(126 * 1.2) == 151.2
        assert round_to_2_decimals(22.499) == 22.5
        assert round_to_4_decimals(0.19999999999999996) == 0.2
