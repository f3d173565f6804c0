"""
Unit Tests for Rule Engine Module.

Tests the sinus rhythm and atrial fibrillation decision tables with
hand-built measurement bundles.

Test Strategy:
    - Walk every terminal stage of both rule chains
    - Pin each published cut-point on both sides of its boundary
    - Check partial-data behavior: absence removes a vote, never counts as zero

References:
    - ASE 2025 Guideline for the Evaluation of LV Diastolic Function
"""

import pytest
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lvdd.config import GRADES
from lvdd.data.measurements import MeasurementBundle
from lvdd.rules import (
    DDResult,
    Tone,
    compute_af,
    compute_dd2025,
    compute_sinus,
    count_primary_criteria,
    count_secondary_criteria,
)
from lvdd.rules import af as af_rules
from lvdd.rules import sinus as sinus_rules


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def normal_sinus() -> MeasurementBundle:
    """Sinus rhythm with all top markers normal."""
    return MeasurementBundle(e=80, a=60, e_septal=7, e_lateral=10, tr_vmax=2.6)


@pytest.fixture
def elevated_sinus() -> MeasurementBundle:
    """Sinus rhythm with all three top markers abnormal and LAVI enlarged."""
    return MeasurementBundle(e=120, a=80, e_septal=5, e_lateral=6, tr_vmax=3.0, lavi=40)


@pytest.fixture
def af_two_criteria() -> MeasurementBundle:
    """AF bundle with exactly two primary criteria positive (TR and DT)."""
    return MeasurementBundle(is_af=True, e=95, e_septal=9, tr_vmax=3.0, dt=140)


# =============================================================================
# Sinus Rhythm Tests
# =============================================================================

class TestSinusRhythm:
    """Tests for the sinus rhythm algorithm."""

    def test_all_markers_normal(self, normal_sinus: MeasurementBundle):
        """E=80, A=60, e′ 7/10, TR 2.6 → Normal DF with derived ratios."""
        result = compute_sinus(normal_sinus)

        assert isinstance(result, DDResult)
        assert result.grade_label == GRADES.NORMAL_DF
        assert result.tone is Tone.GREEN
        assert result.derived.ea == 1.33
        assert result.derived.e_avg == 8.5
        assert result.derived.ee_avg == 9.41
        assert result.rule_trace == ("Top markers abnormal: 0/3",)
        assert result.missing == ()

    def test_normal_ignores_confirmatory_inputs(self, normal_sinus: MeasurementBundle):
        """With no abnormal top marker, confirmatory values cannot change the grade."""
        bundle = replace(normal_sinus, lavi=60, lars=5, pv_sd=0.3, ivrt=40)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.NORMAL_DF
        assert len(result.rule_trace) == 1

    def test_reduced_e_prime_only_with_low_ea_is_grade_1(self):
        """E=50, A=80, e′ 5/6 → reduced e′ only, E/A 0.63 → Grade 1."""
        bundle = MeasurementBundle(e=50, a=80, e_septal=5, e_lateral=6)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.GRADE_1
        assert result.tone is Tone.BLUE
        assert result.derived.ea == 0.63
        assert result.derived.ee_avg == 9.09
        assert result.rule_trace == ("Top markers abnormal: 1/3", "Reduced e′ only branch")

    def test_high_ee_blocks_grade_1_shortcut(self):
        """E=90, e′ 5/6 gives E/e′ 16.36, so reduced e′ is not isolated."""
        bundle = MeasurementBundle(e=90, a=130, e_septal=5, e_lateral=6)
        result = compute_sinus(bundle)

        assert result.derived.ea == 0.69
        assert result.derived.ee_avg == 16.36
        assert result.rule_trace == (
            "Top markers abnormal: 2/3",
            "No confirmatory variables available",
        )
        assert result.grade_label == GRADES.INDETERMINATE

    def test_grade_1_boundary_ea_exactly_08(self):
        """E/A of exactly 0.8 still qualifies for Grade 1."""
        bundle = MeasurementBundle(e=40, a=50, e_septal=5)
        assert compute_sinus(bundle).grade_label == GRADES.GRADE_1

    def test_reduced_e_prime_only_high_ea_falls_through(self):
        """Reduced e′ only with E/A > 0.8 continues to the confirmatory stage."""
        bundle = MeasurementBundle(e=60, a=60, e_septal=5, e_lateral=6)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.INDETERMINATE
        assert result.summary == sinus_rules.REASON_NO_CONFIRMATORY
        assert result.rule_trace == (
            "Top markers abnormal: 1/3",
            "Reduced e′ only branch",
            "No confirmatory variables available",
        )

    def test_reduced_e_prime_only_missing_a_falls_through(self):
        """Reduced e′ only without A cannot be Grade 1."""
        bundle = MeasurementBundle(e=50, e_septal=5, lavi=40)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.INCREASED_LAP_UNKNOWN
        assert result.derived.ea is None
        assert sinus_rules.MISSING_A in result.missing

    def test_no_confirmatory_variables_is_indeterminate(self):
        """Abnormal markers without PV S/D, LARS, LAVI or IVRT → Indeterminate."""
        bundle = MeasurementBundle(e=100, a=80, e_septal=5, tr_vmax=3.0)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.INDETERMINATE
        assert result.tone is Tone.AMBER
        assert result.rule_trace[-1] == "No confirmatory variables available"

    def test_lap_not_confirmed_is_indeterminate(self):
        """Confirmatory inputs present but all normal → Indeterminate."""
        bundle = MeasurementBundle(e=100, a=80, e_septal=5, tr_vmax=3.0,
                                   lavi=30, lars=25, pv_sd=1.2, ivrt=90)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.INDETERMINATE
        assert result.summary == sinus_rules.REASON_LAP_NOT_CONFIRMED
        assert result.rule_trace[-1] == "LAP not elevated"

    def test_elevated_lap_low_ea_is_grade_2(self, elevated_sinus: MeasurementBundle):
        """Elevated LAP with E/A 1.5 → Grade 2."""
        result = compute_sinus(elevated_sinus)

        assert result.grade_label == GRADES.GRADE_2
        assert result.tone is Tone.RED
        assert result.rule_trace == ("Top markers abnormal: 3/3", "LAP elevated")

    def test_elevated_lap_ea_exactly_2_is_grade_3(self, elevated_sinus: MeasurementBundle):
        """E/A of exactly 2.00 is Grade 3 (inclusive boundary)."""
        bundle = replace(elevated_sinus, e=120, a=60)
        result = compute_sinus(bundle)

        assert result.derived.ea == 2.0
        assert result.grade_label == GRADES.GRADE_3

    def test_elevated_lap_without_a_grade_unknown(self, elevated_sinus: MeasurementBundle):
        """Elevated LAP without E/A cannot separate Grade 2 from 3."""
        bundle = replace(elevated_sinus, a=None)
        result = compute_sinus(bundle)

        assert result.grade_label == GRADES.INCREASED_LAP_UNKNOWN
        assert result.tone is Tone.RED

    def test_zero_a_treated_as_missing_ratio(self, elevated_sinus: MeasurementBundle):
        """A zero denominator yields no E/A rather than an error."""
        bundle = replace(elevated_sinus, a=0)
        result = compute_sinus(bundle)

        assert result.derived.ea is None
        assert result.grade_label == GRADES.INCREASED_LAP_UNKNOWN
        # A was provided, so it is not reported as missing
        assert sinus_rules.MISSING_A not in result.missing

    def test_empty_bundle(self):
        """No measurements at all still produces a result."""
        result = compute_sinus(MeasurementBundle())

        assert result.grade_label == GRADES.NORMAL_DF
        assert result.derived.ea is None
        assert result.derived.e_avg is None
        assert result.derived.ee_avg is None
        assert result.missing == (
            sinus_rules.MISSING_E,
            sinus_rules.MISSING_A,
            sinus_rules.MISSING_E_PRIME,
        )

    def test_single_e_prime_passthrough(self):
        """Average e′ is the single present value, unrounded."""
        bundle = MeasurementBundle(e=80, a=60, e_lateral=10.125)
        result = compute_sinus(bundle)

        assert result.derived.e_avg == 10.125
        assert sinus_rules.MISSING_E_PRIME not in result.missing


class TestSinusThresholds:
    """Boundary tests for each sinus rhythm cut-point."""

    @pytest.mark.parametrize("e_septal, abnormal", [(6.0, True), (6.01, False)])
    def test_septal_e_prime(self, e_septal, abnormal):
        """Septal e′ is reduced at ≤ 6 cm/s."""
        result = compute_sinus(MeasurementBundle(e_septal=e_septal, e_lateral=9))
        expected = "Top markers abnormal: 1/3" if abnormal else "Top markers abnormal: 0/3"
        assert result.rule_trace[0] == expected

    @pytest.mark.parametrize("e_lateral, abnormal", [(7.0, True), (7.01, False)])
    def test_lateral_e_prime(self, e_lateral, abnormal):
        """Lateral e′ is reduced at ≤ 7 cm/s."""
        result = compute_sinus(MeasurementBundle(e_lateral=e_lateral))
        assert result.rule_trace[0].endswith("1/3" if abnormal else "0/3")

    @pytest.mark.parametrize("e_septal, abnormal", [(6.5, True), (6.51, False)])
    def test_average_e_prime(self, e_septal, abnormal):
        """A lone septal e′ above 6 is still reduced through the 6.5 average cut-point."""
        result = compute_sinus(MeasurementBundle(e_septal=e_septal))

        assert result.derived.e_avg == e_septal
        assert result.rule_trace[0].endswith("1/3" if abnormal else "0/3")

    def test_both_walls_normal(self):
        """Septal 6.2 and lateral 7.2 average to 6.7, which is normal."""
        result = compute_sinus(MeasurementBundle(e_septal=6.2, e_lateral=7.2))

        assert result.derived.e_avg == 6.7
        assert result.rule_trace[0].endswith("0/3")

    @pytest.mark.parametrize("e, abnormal", [(140, True), (139, False)])
    def test_average_ee(self, e, abnormal):
        """E/average e′ is high at ≥ 14."""
        result = compute_sinus(MeasurementBundle(e=e, e_septal=10, e_lateral=10))
        assert result.derived.ee_avg == pytest.approx(e / 10)
        assert result.rule_trace[0].endswith("1/3" if abnormal else "0/3")

    @pytest.mark.parametrize("tr_vmax, pasp, abnormal", [
        (2.8, None, True),
        (2.79, None, False),
        (None, 35, True),
        (None, 34.9, False),
        (2.5, 40, True),
    ])
    def test_tr_or_pasp(self, tr_vmax, pasp, abnormal):
        """TR Vmax ≥ 2.8 or PASP ≥ 35 counts as high right-heart pressure."""
        result = compute_sinus(MeasurementBundle(tr_vmax=tr_vmax, pasp=pasp))
        assert result.rule_trace[0].endswith("1/3" if abnormal else "0/3")

    @pytest.mark.parametrize("confirmatory, elevated", [
        ({'pv_sd': 0.67}, True),
        ({'pv_sd': 0.68}, False),
        ({'lars': 18}, True),
        ({'lars': 18.1}, False),
        ({'lavi': 34.1}, True),
        ({'lavi': 34}, False),
        ({'ivrt': 70}, True),
        ({'ivrt': 71}, False),
    ])
    def test_lap_confirmation(self, confirmatory, elevated):
        """Each confirmatory variable on both sides of its cut-point."""
        bundle = MeasurementBundle(e=100, a=80, e_septal=8, tr_vmax=3.0, **confirmatory)
        result = compute_sinus(bundle)

        assert result.rule_trace[-1] == ("LAP elevated" if elevated else "LAP not elevated")
        expected = GRADES.GRADE_2 if elevated else GRADES.INDETERMINATE
        assert result.grade_label == expected


# =============================================================================
# Atrial Fibrillation Tests
# =============================================================================

class TestAtrialFibrillation:
    """Tests for the atrial fibrillation algorithm."""

    def test_four_criteria_elevated(self):
        """E=110, septal e′ 8, TR 3.0, DT 140 → 4/4 → Elevated LAP."""
        bundle = MeasurementBundle(is_af=True, e=110, e_septal=8, tr_vmax=3.0, dt=140)
        result = compute_af(bundle)

        assert result.grade_label == GRADES.ELEVATED_LAP
        assert result.tone is Tone.RED
        assert result.rule_trace == ("AF criteria positive: 4/4",)

    def test_high_tally_ignores_secondary(self):
        """≥3 primary criteria is terminal whatever the secondary inputs say."""
        bundle = MeasurementBundle(is_af=True, e=110, e_septal=8, tr_vmax=3.0, dt=140,
                                   lars=40, pv_sd=2.0, bmi=20)
        assert compute_af(bundle).grade_label == GRADES.ELEVATED_LAP

    def test_low_tally_normal(self):
        """0-1 primary criteria → Normal LAP."""
        bundle = MeasurementBundle(is_af=True, e=80, e_septal=10, tr_vmax=2.5, dt=140)
        result = compute_af(bundle)

        assert result.grade_label == GRADES.NORMAL_LAP
        assert result.tone is Tone.GREEN
        assert result.rule_trace == ("AF criteria positive: 1/4",)

    def test_two_criteria_two_secondary_elevated(self, af_two_criteria: MeasurementBundle):
        """E=95, septal e′ 9, TR 3.0, DT 140; LARS 10, PV S/D 0.8, BMI 25 → Elevated LAP."""
        bundle = replace(af_two_criteria, lars=10, pv_sd=0.8, bmi=25)
        result = compute_af(bundle)

        assert result.grade_label == GRADES.ELEVATED_LAP
        assert result.rule_trace == (
            "AF criteria positive: 2/4",
            "Secondary criteria positive: 2/3",
        )

    def test_two_criteria_no_secondary_indeterminate(self, af_two_criteria: MeasurementBundle):
        """Tally of 2 with no secondary input is always Indeterminate."""
        result = compute_af(af_two_criteria)

        assert result.grade_label == GRADES.INDETERMINATE
        assert result.tone is Tone.AMBER
        assert result.summary == af_rules.REASON_NO_SECONDARY
        assert result.rule_trace[-1] == "Secondary criteria positive: 0/0"

    def test_two_criteria_zero_positive_normal(self, af_two_criteria: MeasurementBundle):
        """Secondary criteria available but all negative → Normal LAP."""
        bundle = replace(af_two_criteria, lars=25, bmi=22)
        result = compute_af(bundle)

        assert result.grade_label == GRADES.NORMAL_LAP
        assert result.summary == af_rules.REASON_SECONDARY_NORMAL
        assert result.rule_trace[-1] == "Secondary criteria positive: 0/2"

    def test_two_criteria_single_positive_indeterminate(self, af_two_criteria: MeasurementBundle):
        """A single positive secondary criterion is not enough either way."""
        bundle = replace(af_two_criteria, bmi=35)
        result = compute_af(bundle)

        assert result.grade_label == GRADES.INDETERMINATE
        assert result.summary == af_rules.REASON_SECONDARY_SINGLE

    def test_ea_always_none(self):
        """AF never reports E/A, even when A is supplied."""
        bundle = MeasurementBundle(is_af=True, e=100, a=50, e_septal=8, e_lateral=12)
        result = compute_af(bundle)

        assert result.derived.ea is None
        assert result.derived.e_avg == 10.0
        assert result.derived.ee_avg == 10.0

    def test_missing_inputs(self):
        """AF advisories cover E, septal e′, TR/PASP and DT."""
        result = compute_af(MeasurementBundle(is_af=True, e_lateral=10))

        assert result.missing == (
            af_rules.MISSING_E,
            af_rules.MISSING_E_SEPTAL,
            af_rules.MISSING_TR_OR_PASP,
            af_rules.MISSING_DT,
        )

    def test_pasp_alone_satisfies_tr_advisory(self):
        """Either TR Vmax or PASP silences the right-heart advisory."""
        result = compute_af(MeasurementBundle(is_af=True, pasp=30))
        assert af_rules.MISSING_TR_OR_PASP not in result.missing


class TestAFCriteria:
    """Boundary tests for AF criteria counting."""

    @pytest.mark.parametrize("bundle, expected", [
        (MeasurementBundle(is_af=True, e=100), 1),
        (MeasurementBundle(is_af=True, e=99.9), 0),
        (MeasurementBundle(is_af=True, tr_vmax=2.8), 0),
        (MeasurementBundle(is_af=True, tr_vmax=2.81), 1),
        (MeasurementBundle(is_af=True, pasp=35), 0),
        (MeasurementBundle(is_af=True, pasp=36), 1),
        (MeasurementBundle(is_af=True, dt=160), 1),
        (MeasurementBundle(is_af=True, dt=161), 0),
    ])
    def test_primary_boundaries(self, bundle, expected):
        """E ≥ 100, TR > 2.8, PASP > 35 and DT ≤ 160."""
        assert count_primary_criteria(bundle) == expected

    def test_septal_ee_uses_raw_ratio(self):
        """Septal E/e′ must exceed 11; exactly 11 does not count."""
        assert count_primary_criteria(MeasurementBundle(is_af=True, e=88, e_septal=8)) == 0
        assert count_primary_criteria(MeasurementBundle(is_af=True, e=88.1, e_septal=8)) == 1

    def test_septal_ee_zero_denominator(self):
        """A zero septal e′ removes the criterion instead of raising."""
        assert count_primary_criteria(MeasurementBundle(is_af=True, e=90, e_septal=0)) == 0

    def test_lateral_e_prime_not_used(self):
        """Only the septal wall counts toward the AF E/e′ criterion."""
        assert count_primary_criteria(MeasurementBundle(is_af=True, e=90, e_lateral=5)) == 0

    @pytest.mark.parametrize("bundle, expected", [
        (MeasurementBundle(is_af=True), (0, 0)),
        (MeasurementBundle(is_af=True, lars=17.9), (1, 1)),
        (MeasurementBundle(is_af=True, lars=18), (0, 1)),
        (MeasurementBundle(is_af=True, pv_sd=0.99, bmi=30), (1, 2)),
        (MeasurementBundle(is_af=True, lars=10, pv_sd=0.5, bmi=31), (3, 3)),
    ])
    def test_secondary_counts(self, bundle, expected):
        """LARS < 18, PV S/D < 1 and BMI > 30, counted only when present."""
        assert count_secondary_criteria(bundle) == expected


# =============================================================================
# Engine Tests
# =============================================================================

class TestEngine:
    """Tests for algorithm dispatch and result properties."""

    def test_dispatch_by_rhythm(self, normal_sinus: MeasurementBundle):
        """is_af selects the algorithm and its vocabulary."""
        assert compute_dd2025(normal_sinus).grade_label == GRADES.NORMAL_DF
        assert compute_dd2025(replace(normal_sinus, is_af=True)).grade_label == GRADES.NORMAL_LAP

    def test_idempotent(self, elevated_sinus: MeasurementBundle):
        """Two evaluations of the same bundle give equal results."""
        first = compute_dd2025(elevated_sinus)
        second = compute_dd2025(elevated_sinus)

        assert first == second
        assert first.rule_trace == second.rule_trace
        assert hash(first) == hash(second)

    def test_result_is_immutable(self, normal_sinus: MeasurementBundle):
        """Results cannot be modified after construction."""
        result = compute_dd2025(normal_sinus)
        with pytest.raises(AttributeError):
            result.grade_label = "Grade 3"  # type: ignore[misc]

    @pytest.mark.parametrize("is_af", [False, True])
    def test_derived_values_rounded(self, is_af):
        """Derived ratios are None or carry at most 2 decimals."""
        bundle = MeasurementBundle(is_af=is_af, e=97.3, a=61.7, e_septal=6.3, e_lateral=8.9)
        result = compute_dd2025(bundle)

        for value in (result.derived.ea, result.derived.e_avg, result.derived.ee_avg):
            if value is not None:
                assert round(value, 2) == value

    @pytest.mark.parametrize("is_af", [False, True])
    def test_missing_never_lists_present_field(self, is_af):
        """A fully populated bundle produces no advisories."""
        bundle = MeasurementBundle(
            is_af=is_af, e=80, a=60, e_septal=7, e_lateral=10, tr_vmax=2.6,
            pasp=30, lavi=30, lars=25, pv_sd=1.1, ivrt=90, dt=200, bmi=24,
        )
        assert compute_dd2025(bundle).missing == ()
