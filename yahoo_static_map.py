import re
from datetime import datetime, timedelta
from urllib.parse import urlencode

import pytz

import config

jst = pytz.timezone(config.RADAR_TIMEZONE)

# Mode -> (number of frames, step between frames, offset of the first frame)
FRAME_SCHEDULES = {
    "now": (1, timedelta(0), timedelta(0)),
    "today": (25, timedelta(hours=1), timedelta(days=-1)),
    "forecast": (7, timedelta(minutes=10), timedelta(minutes=-10)),
}


def jst_now():
    """Current time in the radar time zone."""
    return datetime.now(jst)


def format_radar_date(timestamp):
    """
    Formats a timestamp the way the rainfall overlay expects it: YYYYMMDDHHmm
    in Japan time, whatever the time zone of the machine running the bot.
    Naive datetimes are treated as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = pytz.utc.localize(timestamp)
    return timestamp.astimezone(jst).strftime("%Y%m%d%H%M")


def build_image_url(location, width, height, timestamp, map_mode=None, app_id=None):
    """
    Builds the static map URL for one radar frame.

    Args:
        location: Location to centre the map on.
        width: Image width in pixels.
        height: Image height in pixels.
        timestamp: Time of the rainfall overlay.
        map_mode: Base map style, defaults to YAHOO_JAPAN_API_MAP_MODE.
        app_id: API client id, defaults to YAHOO_JAPAN_API_CLIENT_ID.
    """
    params = {
        "appid": app_id if app_id is not None else (config.YAHOO_JAPAN_API_CLIENT_ID or ""),
        "z": config.MAP_ZOOM,
        "lat": location.lat,
        "lon": location.lon,
        "width": width,
        "height": height,
        "mode": map_mode or config.YAHOO_JAPAN_API_MAP_MODE,
        "overlay": f"type:rainfall|datelabel:on|date:{format_radar_date(timestamp)}",
    }
    return f"{config.YAHOO_STATIC_MAP_URL}?{urlencode(params, safe=':|')}"


def redact_url(url):
    """Hides the API credential so URLs can go into logs and error messages."""
    return re.sub(r"appid=[^&]*", "appid=***", url)


def frame_times(mode, now):
    """
    Returns the overlay timestamps for a mode, oldest first.

    'now' is a single frame, 'today' is 25 hourly frames ending now and
    anything else is the 7-frame forecast starting 10 minutes ago.
    """
    count, step, offset = FRAME_SCHEDULES.get(mode, FRAME_SCHEDULES["forecast"])
    start = now + offset
    return [start + step * i for i in range(count)]
