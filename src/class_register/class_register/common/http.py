from __future__ import annotations

import logging
from datetime import date
from functools import wraps
from typing import Mapping, Optional

from flask import jsonify

from ..core.enums import AttendanceBand, QuickRange
from ..core.exceptions import ConstraintViolation, IOFailure, NotFound, ValidationError
from .datetime_utils import parse_iso_date, start_of_month

logger = logging.getLogger(__name__)


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_errors(view):
    """Map domain errors raised by services to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except ValidationError as e:
            return fail(str(e), 400)
        except NotFound as e:
            return fail(str(e), 404)
        except ConstraintViolation as e:
            return fail(f"Constraint violation: {e}", 409)
        except IOFailure as e:
            logger.error("storage failure in %s: %s", view.__name__, e)
            return fail("Storage unavailable, please retry", 503)

    return wrapper


def parse_day(value: Optional[str], default: date) -> date:
    return parse_iso_date(value) if value else default


def resolve_range(args: Mapping[str, str], today: date) -> tuple[date, date]:
    """Date range from query args: `range=<quick range>` or `start`/`end`.

    Defaults to the current month up to today.
    """
    quick = args.get("range")
    if quick:
        try:
            return QuickRange(quick).date_range(today)
        except ValueError:
            raise ValidationError(f"Unknown range: {quick!r}") from None

    start = parse_day(args.get("start"), start_of_month(today))
    end = parse_day(args.get("end"), today)
    return start, end


def parse_band(value: Optional[str]) -> Optional[AttendanceBand]:
    if not value or value == "all":
        return None
    try:
        return AttendanceBand(value)
    except ValueError:
        raise ValidationError(f"Unknown band: {value!r}") from None


def iso(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None
