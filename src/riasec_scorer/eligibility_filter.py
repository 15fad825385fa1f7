"""Eligibility Filter - first phase of the Recommendation Engine.

Removes careers that fail a caller-supplied constraint before any scoring
happens. Checks run in a fixed order and stop at the first failure, so each
excluded career carries exactly one reason.
"""

from typing import Optional

from .schema import (
    CareerEntry,
    EmployabilityTier,
    ExcludedCareer,
    RecommendationConstraints,
)


class EligibilityFilter:
    """Filters careers by area, duration, employability and salary.

    An unset constraint never excludes anything. A set constraint excludes
    careers whose attribute is missing, since they cannot be shown to
    satisfy it.
    """

    def __init__(self, constraints: RecommendationConstraints):
        self.constraints = constraints

    def filter(
        self,
        careers: list[CareerEntry],
    ) -> tuple[list[CareerEntry], list[ExcludedCareer]]:
        """Split careers into eligible and excluded.

        Args:
            careers: Careers to check, in catalog order

        Returns:
            Tuple of (eligible_careers, excluded_careers), both in input order
        """
        eligible = []
        excluded = []

        for career in careers:
            exclusion = self._check_eligibility(career)
            if exclusion:
                excluded.append(exclusion)
            else:
                eligible.append(career)

        return eligible, excluded

    def _check_eligibility(self, career: CareerEntry) -> Optional[ExcludedCareer]:
        """Return the first failing rule for a career, or None if eligible."""
        checks = (
            self._check_area,
            self._check_duration,
            self._check_employability,
            self._check_salary,
        )
        for check in checks:
            exclusion = check(career)
            if exclusion:
                return exclusion
        return None

    def _check_area(self, career: CareerEntry) -> Optional[ExcludedCareer]:
        areas = self.constraints.areas
        if not areas or career.area in areas:
            return None
        return ExcludedCareer(
            career_id=career.id,
            name=career.name,
            reason_type="area_not_selected",
            description=f"Area '{career.area}' not in {', '.join(sorted(areas))}",
        )

    def _check_duration(self, career: CareerEntry) -> Optional[ExcludedCareer]:
        max_duration = self.constraints.max_duration
        if max_duration is None:
            return None
        if career.duration_years is not None and career.duration_years <= max_duration:
            return None
        return ExcludedCareer(
            career_id=career.id,
            name=career.name,
            reason_type="duration_too_long",
            description=(
                f"Duration {_fmt(career.duration_years)} years exceeds "
                f"{_fmt(max_duration)} years"
            ),
        )

    def _check_employability(self, career: CareerEntry) -> Optional[ExcludedCareer]:
        minimum: Optional[EmployabilityTier] = self.constraints.min_employability
        if minimum is None:
            return None
        tier = career.employability
        if tier is not None and tier.rank >= minimum.rank:
            return None
        return ExcludedCareer(
            career_id=career.id,
            name=career.name,
            reason_type="employability_below_minimum",
            description=(
                f"Employability {tier.value if tier else 'unknown'} "
                f"below {minimum.value}"
            ),
        )

    def _check_salary(self, career: CareerEntry) -> Optional[ExcludedCareer]:
        min_salary = self.constraints.min_salary
        if min_salary is None:
            return None
        if career.average_salary is not None and career.average_salary >= min_salary:
            return None
        return ExcludedCareer(
            career_id=career.id,
            name=career.name,
            reason_type="salary_below_minimum",
            description=(
                f"Average salary {_fmt(career.average_salary)} below {_fmt(min_salary)}"
            ),
        )


def _fmt(value: Optional[float]) -> str:
    if value is None:
        return "unknown"
    if float(value).is_integer():
        return str(int(value))
    return str(value)
