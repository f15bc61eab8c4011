"""Daily calorie goal derived from a user profile."""

from datetime import date

from calorie_tracker.domain.profiles import ActivityLevel, UserProfile

DEFAULT_CALORIE_GOAL = 2000.0

_GENDER_OFFSETS = {
    "male": 5.0,
    "female": -161.0,
}
# Mean of the male and female offsets.
_UNSPECIFIED_GENDER_OFFSET = -78.0

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
}
_DEFAULT_MULTIPLIER = 1.2


def calculate_calorie_goal(
    profile: UserProfile | None, today: date | None = None
) -> float:
    """Return the daily calorie goal for a profile, or the default without one.

    Uses the Mifflin-St Jeor BMR scaled by the activity multiplier. Age is the
    difference in calendar years and ignores the birth month and day.
    """
    if profile is None:
        return DEFAULT_CALORIE_GOAL
    reference = today or date.today()
    age = reference.year - profile.birthdate.year
    bmr = basal_metabolic_rate(
        weight_kg=profile.current_weight,
        height_cm=profile.height,
        age=age,
        gender=profile.gender,
    )
    return bmr * activity_multiplier(profile.activity_level)


def basal_metabolic_rate(
    weight_kg: float, height_cm: float, age: int, gender: str
) -> float:
    """Mifflin-St Jeor basal metabolic rate."""
    offset = _GENDER_OFFSETS.get(gender.strip().lower(), _UNSPECIFIED_GENDER_OFFSET)
    return 10 * weight_kg + 6.25 * height_cm - 5 * age + offset


def activity_multiplier(activity_level: str) -> float:
    """Multiplier for an activity level, defaulting to sedentary."""
    return ACTIVITY_MULTIPLIERS.get(activity_level, _DEFAULT_MULTIPLIER)
