"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class CoordinateOrder(str, Enum):
    """How a raw record's field names map onto real axes."""

    LAT_LON = "lat_lon"  # field names are truthful
    LON_LAT = "lon_lat"  # "latitude" holds the longitude and vice versa


class PresenceMatch(str, Enum):
    INSIDE_POLYGON = "inside_polygon"
    NEAR_POLYGON = "near_polygon"
    NEAR_CENTER = "near_center"
    OUTSIDE = "outside"
    NO_LOCATION = "no_location"
    NO_SITE_DATA = "no_site_data"


class GatedAction(str, Enum):
    """Write actions only allowed to users standing on the site."""

    ACCEPT_DELIVERY = "accept_delivery"
    CREATE_VIOLATION = "create_violation"
    CREATE_REMARK = "create_remark"
    FIX_VIOLATION = "fix_violation"
    CLOSE_WORK_DAY = "close_work_day"
