"""
Repository for Pageview database operations

Besides inserts and range reads this holds the two reporting aggregates:
the bucketed pageview trend and the pageviews/uniques/bounces summary.
"""

from datetime import timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy import DateTime, Integer, bindparam, text
from sqlalchemy.exc import SQLAlchemyError
from db import db
from constants import TIME_UNITS, COUNT_EXPRESSIONS, COUNT_SESSIONS
from exceptions import ValidationException
from models.pageview import Pageview
from utils import ensure_utc, truncate_datetime

TREND_SQL = """
    select date_trunc(:unit, created_at at time zone :timezone) t,
    count({count}) y
    from pageview
    where website_id=:website_id
    and created_at between :start_at and :end_at
    group by 1
    order by 1
"""

SUMMARY_SQL = """
    select
       (select count(*)
          from pageview
          where website_id=:website_id
          and created_at between :start_at and :end_at
        ) as pageviews,
       (select
          count(distinct session_id)
          from pageview
          where website_id=:website_id
          and created_at between :start_at and :end_at
       ) as uniques,
       (select sum(t.c) from
         (select count(*) c
            from pageview
            where website_id=:website_id
            and created_at between :start_at and :end_at
            group by session_id
            having count(*) = 1
        ) t
       ) as bounces
"""


def _range_params(*extra):
    return (
        bindparam("website_id", type_=Integer),
        bindparam("start_at", type_=DateTime(timezone=True)),
        bindparam("end_at", type_=DateTime(timezone=True)),
    ) + extra


def resolve_timezone(name):
    """Map a timezone name to (canonical name, tzinfo); utc is case-insensitive"""
    if not isinstance(name, str) or not name:
        raise ValidationException(f"Invalid timezone: {name!r}")
    if name.lower() == "utc":
        return "UTC", dt_timezone.utc
    try:
        return name, ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        # zone directories such as "America" raise IsADirectoryError
        raise ValidationException(f"Invalid timezone: {name!r}")


class PageviewRepository:
    """Repository for Pageview database operations"""

    @staticmethod
    def create(website_id, session_id, url, referrer):
        """Create new Pageview record"""
        try:
            item = Pageview(website_id=website_id, session_id=session_id, url=url, referrer=referrer)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError as e:
            db.session.rollback()
            raise e

    @staticmethod
    def get_range(website_id, start_at, end_at):
        """Get pageviews for a website with start_at <= created_at <= end_at"""
        return (
            Pageview.query.filter(
                Pageview.website_id == website_id,
                Pageview.created_at >= ensure_utc(start_at),
                Pageview.created_at <= ensure_utc(end_at),
            )
            .order_by(Pageview.created_at, Pageview.view_id)
            .all()
        )

    @staticmethod
    def trend_statement(count="*"):
        """Raw date_trunc trend query; count must already be validated"""
        return text(TREND_SQL.format(count=count)).bindparams(*_range_params(bindparam("unit"), bindparam("timezone")))

    @staticmethod
    def get_trend(website_id, start_at, end_at, timezone="utc", unit="day", count="*"):
        """
        Count pageviews per `unit` bucket in `timezone`.

        PostgreSQL runs the raw date_trunc query. Other backends have no
        date_trunc, so the rows in range are bucketed here instead.
        """
        if unit not in TIME_UNITS:
            raise ValidationException(f"Invalid time unit: {unit!r}")
        if count not in COUNT_EXPRESSIONS:
            raise ValidationException(f"Invalid count expression: {count!r}")
        tz_name, tz = resolve_timezone(timezone)
        start_at, end_at = ensure_utc(start_at), ensure_utc(end_at)

        if db.engine.dialect.name == "postgresql":
            rows = db.session.execute(
                PageviewRepository.trend_statement(count),
                {
                    "website_id": website_id,
                    "start_at": start_at,
                    "end_at": end_at,
                    "unit": unit,
                    "timezone": tz_name,
                },
            ).all()
            return [{"t": row.t, "y": row.y} for row in rows]

        rows = (
            db.session.query(Pageview.created_at, Pageview.session_id)
            .filter(
                Pageview.website_id == website_id,
                Pageview.created_at >= start_at,
                Pageview.created_at <= end_at,
            )
            .all()
        )

        buckets = {}
        for created_at, session_id in rows:
            local = ensure_utc(created_at).astimezone(tz).replace(tzinfo=None)
            buckets.setdefault(truncate_datetime(local, unit), []).append(session_id)

        return [
            {"t": bucket, "y": len(set(sessions)) if count == COUNT_SESSIONS else len(sessions)}
            for bucket, sessions in sorted(buckets.items())
        ]

    @staticmethod
    def summary_statement():
        return text(SUMMARY_SQL).bindparams(*_range_params())

    @staticmethod
    def get_summary(website_id, start_at, end_at):
        """Total pageviews, unique sessions and single-pageview sessions in range"""
        row = (
            db.session.execute(
                PageviewRepository.summary_statement(),
                {"website_id": website_id, "start_at": ensure_utc(start_at), "end_at": ensure_utc(end_at)},
            )
            .mappings()
            .one()
        )
        return {
            "pageviews": int(row["pageviews"] or 0),
            "uniques": int(row["uniques"] or 0),
            "bounces": int(row["bounces"] or 0),
        }
