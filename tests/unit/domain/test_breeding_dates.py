from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from rabbitry.domain.services.breeding_dates import (
    project_breeding_dates,
    project_delivery_date,
    project_palpation_date,
)


def test_projects_palpation_and_delivery_from_farm_settings():
    dates = project_breeding_dates(date(2024, 1, 1), palpation_days=14, gestation_days=31)
    assert dates.palpation_date == date(2024, 1, 15)
    assert dates.delivery_date == date(2024, 2, 1)


def test_projection_crosses_month_and_leap_day():
    assert project_delivery_date(date(2024, 2, 10), 31) == date(2024, 3, 12)
    assert project_palpation_date(date(2023, 12, 25), 10) == date(2024, 1, 4)


def test_datetime_input_drops_time_of_day():
    late = datetime(2024, 1, 1, 23, 30, tzinfo=timezone.utc)
    assert project_palpation_date(late, 14) == date(2024, 1, 15)


@given(
    mating_date=st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 1, 1)),
    palpation_days=st.integers(min_value=10, max_value=20),
    gestation_days=st.integers(min_value=28, max_value=35),
)
def test_projected_dates_follow_mating_by_configured_days(
    mating_date, palpation_days, gestation_days
):
    dates = project_breeding_dates(mating_date, palpation_days, gestation_days)
    assert dates.palpation_date - mating_date == timedelta(days=palpation_days)
    assert dates.delivery_date - mating_date == timedelta(days=gestation_days)
    assert dates.palpation_date < dates.delivery_date
