"""
core/nutrition_plan.py
────────────────────────────────────────────────────────────────────────
Daily nutrition plan derived at the end of onboarding:

1. BMR  (Mifflin–St Jeor)
2. TDEE (activity multiplier)
3. Goal adjustment (deficit / surplus scaled by experience + frequency)
4. Target calories, clamped to a sex-dependent safe minimum
5. Macro split (protein g/kg, fat fraction, carbs take the remainder)
6. Expected weekly rate of change (7700 kcal ≈ 1 kg)

Pure and stateless: one instance can be shared by every request.
"""

from __future__ import annotations

import logging
import math

from core.models.plan import MacroBreakdown, MacroEntry, NutritionPlan
from core.models.profile import (
    ActivityLevel,
    BuildMuscleOptions,
    Experience,
    FatGainTolerance,
    Goal,
    LoseWeightOptions,
    MaintainHealthOptions,
    Pace,
    ProfileInput,
    Sex,
    WorkoutFrequency,
)

Logger = logging.getLogger(__name__)

DEFICIT = "deficit"
SURPLUS = "surplus"

KCAL_PER_KG = 7700
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARB = 4
KCAL_PER_G_FAT = 9


def round_half_up(x: float) -> int:
    """Round .5 towards +inf (Python's round() would go to the even side)."""
    return math.floor(x + 0.5)


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionPlanCalculator:
    """Profile + goal choices ➜ BMR, TDEE, calorie target and macro split."""

    ACTIVITY_MULTIPLIERS = {
        ActivityLevel.sedentary: 1.2,
        ActivityLevel.lightly_active: 1.375,
        ActivityLevel.moderate: 1.55,
        ActivityLevel.very_active: 1.725,
        ActivityLevel.athlete: 1.9,
    }
    DEFAULT_ACTIVITY_MULTIPLIER = 1.2

    SAFE_MIN_CALORIES = {Sex.male: 1500, Sex.female: 1200}

    # g protein per kg body weight
    PROTEIN_RANGES = {
        Goal.lose_weight: (1.6, 2.2),
        Goal.maintain_health: (1.2, 1.6),
        Goal.build_muscle: (1.6, 2.0),
    }

    FAT_MIN_FRACTION = 0.20
    FAT_MAX_FRACTION = 0.35

    PACE_DEFICIT = {
        Pace.slow: -250,
        Pace.moderate: -500,
        Pace.fast: -750,
        Pace.aggressive: -750,
    }
    DEFICIT_BOUNDS = (-750, -250)

    EXPERIENCE_SURPLUS = {
        Experience.beginner: 300,
        Experience.intermediate: 250,
        Experience.advanced: 200,
    }
    SURPLUS_BOUNDS = (150, 400)
    MINIMAL_FAT_GAIN_REDUCTION = 50

    # --------------- public entrypoint --------------------------------
    def compute(self, profile: ProfileInput) -> NutritionPlan:
        notes: list[str] = []

        bmr = self.bmr(profile)
        tdee = self.tdee(profile)
        adjustment, protein_per_kg, fat_fraction = self._goal_adjustment(profile, notes)

        target = self._target_calories(profile.sex, tdee, adjustment, notes)

        if protein_per_kg is None:
            protein_per_kg = self._protein_midpoint(Goal.maintain_health)
            notes.append("Default protein range applied")

        macros = self._macros(profile.weight_kg, target, protein_per_kg, fat_fraction, notes)

        rate = self.expected_rate_per_week(adjustment)
        if adjustment != 0:
            notes.append(f"Approximate change: {_fmt_number(rate)} kg/week (estimate, actual will vary)")

        Logger.debug(
            "plan: bmr=%.2f tdee=%d adj=%.1f target=%d goal=%s",
            bmr, tdee, adjustment, target, profile.goal,
        )
        return NutritionPlan(
            bmr=round_half_up(bmr),
            tdee=tdee,
            target_calories=target,
            calorie_adjustment=adjustment,
            macros=macros,
            expected_rate_per_week=rate,
            notes=tuple(notes),
        )

    # --------------- BMR / TDEE -------------------------------------
    def bmr(self, p: ProfileInput) -> float:
        base = 10 * p.weight_kg + 6.25 * p.height_cm - 5 * p.age
        return base + (5 if p.sex == Sex.male else -161)

    def tdee(self, p: ProfileInput) -> int:
        multiplier = self.ACTIVITY_MULTIPLIERS.get(
            p.activity_level, self.DEFAULT_ACTIVITY_MULTIPLIER
        )
        return round_half_up(self.bmr(p) * multiplier)

    # --------------- scaling factors ---------------------------------
    @staticmethod
    def experience_factor(diet_experience: Experience | None, kind: str) -> float:
        """Beginners get a gentler change, advanced dieters a slightly bigger one."""
        if diet_experience == Experience.beginner:
            return 0.7 if kind == DEFICIT else 0.8
        if diet_experience == Experience.advanced:
            return 1.1
        return 1.0

    @staticmethod
    def frequency_factor(workout_frequency: WorkoutFrequency | None, kind: str) -> float:
        if workout_frequency == WorkoutFrequency.low:
            return 0.7
        if workout_frequency == WorkoutFrequency.high:
            return 1.0 if kind == DEFICIT else 1.1
        return 1.0

    def adjust(self, base: float, kind: str, p: ProfileInput) -> float:
        opts = p.goal_options
        return (
            base
            * self.experience_factor(opts.diet_experience, kind)
            * self.frequency_factor(opts.workout_frequency, kind)
        )

    # --------------- Goal logic --------------------------------------
    def _protein_midpoint(self, goal: Goal) -> float:
        lo, hi = self.PROTEIN_RANGES[goal]
        return (lo + hi) / 2

    def _goal_adjustment(
        self, p: ProfileInput, notes: list[str]
    ) -> tuple[float, float | None, float]:
        """Return (calorie adjustment, protein g/kg or None, fat fraction)."""
        opts = p.goal_options
        experience = opts.diet_experience.value if opts.diet_experience else "intermediate"
        frequency = opts.workout_frequency.value if opts.workout_frequency else "2-3"

        if isinstance(opts, LoseWeightOptions):
            base = self.PACE_DEFICIT.get(opts.pace, self.PACE_DEFICIT[Pace.moderate])
            lo, hi = self.DEFICIT_BOUNDS
            deficit = min(max(self.adjust(base, DEFICIT, p), lo), hi)

            notes.append("Fat loss focused calorie deficit")
            notes.append(
                f"Deficit scaled for experience ({experience}) "
                f"and workout frequency ({frequency} days/week)"
            )
            return deficit, self._protein_midpoint(Goal.lose_weight), 0.25

        if isinstance(opts, MaintainHealthOptions):
            focus = opts.focus or "general_health"
            notes.append("Calories set to maintenance level")
            notes.append(f"Focus: {focus.replace('_', ' ', 1)}")
            return 0, self._protein_midpoint(Goal.maintain_health), 0.30

        if isinstance(opts, BuildMuscleOptions):
            base = self.EXPERIENCE_SURPLUS.get(
                opts.training_experience, self.EXPERIENCE_SURPLUS[Experience.intermediate]
            )
            surplus = self.adjust(base, SURPLUS, p)
            if opts.fat_gain_tolerance == FatGainTolerance.minimal:
                surplus -= self.MINIMAL_FAT_GAIN_REDUCTION
                notes.append("Minimal fat gain preference — surplus reduced")

            lo, hi = self.SURPLUS_BOUNDS
            surplus = min(max(surplus, lo), hi)

            notes.append("Lean muscle gain focused calorie surplus")
            notes.append(
                f"Surplus scaled for experience ({experience}) "
                f"and workout frequency ({frequency} days/week)"
            )
            return surplus, self._protein_midpoint(Goal.build_muscle), 0.25

        Logger.info("unknown goal, using maintenance calories")
        return 0, None, 0.25

    # --------------- Calories ---------------------------------------
    def _target_calories(
        self, sex: Sex, tdee: int, adjustment: float, notes: list[str]
    ) -> int:
        target = round_half_up(tdee + adjustment)
        floor = self.SAFE_MIN_CALORIES[sex]
        if target < floor:
            Logger.info("target %d kcal below safe minimum, clamped to %d", target, floor)
            target = floor
            notes.append("Calories adjusted to safe minimum")
        return target

    # --------------- Macros -----------------------------------------
    def _macros(
        self,
        weight_kg: float,
        target: int,
        protein_per_kg: float,
        fat_fraction: float,
        notes: list[str],
    ) -> MacroBreakdown:
        protein_g = round_half_up(protein_per_kg * weight_kg)
        protein_kcal = protein_g * KCAL_PER_G_PROTEIN

        fat_fraction = min(max(fat_fraction, self.FAT_MIN_FRACTION), self.FAT_MAX_FRACTION)
        fat_kcal = target * fat_fraction
        carb_kcal = target - protein_kcal - fat_kcal

        if carb_kcal < 0:
            # keep >= 60 % of target for protein + carbs, fat never below 20 %
            fat_kcal = max(
                target * self.FAT_MIN_FRACTION,
                target - protein_kcal - 0.4 * target,
            )
            carb_kcal = max(target - protein_kcal - fat_kcal, 0)
            notes.append("Fat intake adjusted to fit calorie and protein targets")

        fat_g = round_half_up(fat_kcal / KCAL_PER_G_FAT)
        carb_g = round_half_up(carb_kcal / KCAL_PER_G_CARB)

        def entry(grams: int, kcal: float) -> MacroEntry:
            return MacroEntry(
                grams=grams,
                calories=round_half_up(kcal),
                percentage=kcal / target * 100,
            )

        return MacroBreakdown(
            protein=entry(protein_g, protein_kcal),
            carbs=entry(carb_g, carb_kcal),
            fats=entry(fat_g, fat_kcal),
        )

    # --------------- Rate -------------------------------------------
    @staticmethod
    def expected_rate_per_week(adjustment: float) -> float:
        return round_half_up(adjustment * 7 / KCAL_PER_KG * 100) / 100


def _fmt_number(x: float) -> str:
    """-0.45 ➜ '-0.45', 0.2 ➜ '0.2', 1.0 ➜ '1'."""
    return f"{x:g}"
