# backend/modules/analytics/services/period_resolver.py

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from ..constants import WEEK_PERIOD_DAYS, MONTH_PERIOD_MONTHS
from ..exceptions import InvalidPeriodError
from ..schemas.sales_summary_schemas import SalesPeriod


@dataclass(frozen=True)
class PeriodWindow:
    """Reporting window; both ends are naive local wall-clock times"""

    start: datetime
    end: datetime
    include_end: bool = True

    def contains(self, moment: datetime) -> bool:
        if moment < self.start:
            return False
        if self.include_end:
            return moment <= self.end
        return moment < self.end


def parse_period(period: Union[SalesPeriod, str]) -> SalesPeriod:
    """Coerce a selector to SalesPeriod, failing fast on unknown values"""
    if isinstance(period, SalesPeriod):
        return period
    try:
        return SalesPeriod(period)
    except ValueError:
        raise InvalidPeriodError(period, [p.value for p in SalesPeriod]) from None


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Express a timestamp as naive local wall-clock time.

    Naive values are assumed to already be local. Aware values are converted
    to ``tz`` when given, otherwise to the host's local zone.
    """
    if moment.tzinfo is None:
        return moment
    if tz is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(tz).replace(tzinfo=None)


def local_now(tz: Optional[tzinfo] = None) -> datetime:
    if tz is None:
        return datetime.now()
    return datetime.now(tz).replace(tzinfo=None)


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def resolve_period_window(
    period: Union[SalesPeriod, str],
    now: datetime,
    bound_yesterday_to_midnight: bool = False,
) -> PeriodWindow:
    """
    Map a period selector to the window used for the scalar metrics.

    Args:
        period: today, yesterday, week or month
        now: current local time (naive)
        bound_yesterday_to_midnight: end the yesterday window at today's
            midnight instead of now

    The yesterday window runs from yesterday's midnight through ``now`` unless
    ``bound_yesterday_to_midnight`` is set, so by default it also includes
    today's orders.
    """
    period = parse_period(period)
    today = start_of_day(now)

    if period == SalesPeriod.TODAY:
        return PeriodWindow(start=today, end=now)

    if period == SalesPeriod.YESTERDAY:
        start = today - timedelta(days=1)
        if bound_yesterday_to_midnight:
            return PeriodWindow(start=start, end=today, include_end=False)
        return PeriodWindow(start=start, end=now)

    if period == SalesPeriod.WEEK:
        return PeriodWindow(start=today - timedelta(days=WEEK_PERIOD_DAYS), end=now)

    if period == SalesPeriod.MONTH:
        # relativedelta clamps to the shorter month (Mar 31 -> Feb 28)
        return PeriodWindow(
            start=today - relativedelta(months=MONTH_PERIOD_MONTHS), end=now
        )

    # Unreachable while every SalesPeriod member is handled above
    raise InvalidPeriodError(period, [p.value for p in SalesPeriod])
