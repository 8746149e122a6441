# --- config.py

import os

# Discord Bot Token
DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")  # Get from environment variable

# Yahoo! JAPAN static map API
YAHOO_JAPAN_API_CLIENT_ID = os.getenv("YAHOO_JAPAN_API_CLIENT_ID")
YAHOO_JAPAN_API_MAP_MODE = os.getenv("YAHOO_JAPAN_API_MAP_MODE", "map")
YAHOO_STATIC_MAP_URL = "https://map.yahooapis.jp/map/V1/static"
MAP_ZOOM = 10

# Radar image settings
IMAGE_WIDTH = 400
IMAGE_HEIGHT = 300
RADAR_TIMEZONE = "Asia/Tokyo"
DEFAULT_LOCATION = "tokyo"

# GIF settings
GIF_REPEAT = 0  # 0 for repeat forever
GIF_DELAY_MS = 1000  # frame delay in ms
GIF_QUALITY = 5  # lower is better looking, higher is smaller/faster

# Bot Settings
COMMAND_PREFIX = os.getenv("COMMAND_PREFIX", "$")
SLASH_COMMAND_NAME = os.getenv("SLASH_COMMAND_NAME", "amesh").replace("/", "")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
STARTUP_MESSAGE = "⚡️ 雨雲レーダーアプリが起動しました ⛈️"
