from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True, slots=True)
class BreedingDates:
    palpation_date: date
    delivery_date: date


def _as_date(value: date) -> date:
    # datetime is a subclass of date; drop the time of day
    return value.date() if isinstance(value, datetime) else value


def project_palpation_date(mating_date: date, palpation_days: int) -> date:
    return _as_date(mating_date) + timedelta(days=palpation_days)


def project_delivery_date(mating_date: date, gestation_days: int) -> date:
    return _as_date(mating_date) + timedelta(days=gestation_days)


def project_breeding_dates(
    mating_date: date, palpation_days: int, gestation_days: int
) -> BreedingDates:
    """Project the palpation check and expected kindling date of a mating.

    Plain calendar arithmetic; the farm timezone only matters when the
    dates are displayed.
    """
    return BreedingDates(
        palpation_date=project_palpation_date(mating_date, palpation_days),
        delivery_date=project_delivery_date(mating_date, gestation_days),
    )
