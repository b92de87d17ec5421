"""
Website Routes - Read-only stats endpoints for a tracked website
"""

from flask import Blueprint, request

from api_responses import success_response, not_found_response
from constants import DEFAULT_TIMEZONE, DEFAULT_UNIT, COUNT_ALL, COUNT_SESSIONS
from db import get_website, get_summary, get_pageview_data, to_dict
from exceptions import ValidationException
from utils import from_epoch_ms

websites_bp = Blueprint("websites", __name__, url_prefix="/api")


def _get_range():
    start_at = request.args.get("start_at")
    end_at = request.args.get("end_at")
    if start_at is None or end_at is None:
        raise ValidationException("start_at and end_at are required")

    start_at, end_at = from_epoch_ms(start_at), from_epoch_ms(end_at)
    if start_at > end_at:
        raise ValidationException("start_at must not be after end_at")
    return start_at, end_at


@websites_bp.route("/website/<website_uuid>")
def website_detail(website_uuid):
    website = get_website(website_uuid)
    if not website:
        return not_found_response("Website", website_uuid)
    return success_response(to_dict(website))


@websites_bp.route("/website/<website_uuid>/stats")
def website_stats(website_uuid):
    """Pageviews, unique visitors and bounces for the requested range"""
    start_at, end_at = _get_range()
    website = get_website(website_uuid)
    if not website:
        return not_found_response("Website", website_uuid)

    return success_response(get_summary(website.website_id, start_at, end_at))


@websites_bp.route("/website/<website_uuid>/pageviews")
def website_pageviews(website_uuid):
    """Pageview trend; ?count=sessions counts unique visitors instead"""
    start_at, end_at = _get_range()
    unit = request.args.get("unit", DEFAULT_UNIT)
    tz = request.args.get("tz", DEFAULT_TIMEZONE)
    count = COUNT_SESSIONS if request.args.get("count") == "sessions" else COUNT_ALL

    website = get_website(website_uuid)
    if not website:
        return not_found_response("Website", website_uuid)

    data = get_pageview_data(website.website_id, start_at, end_at, timezone=tz, unit=unit, count=count)
    return success_response([{"t": row["t"].isoformat(), "y": row["y"]} for row in data])
