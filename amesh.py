import logging

import aiohttp
import discord
from discord import app_commands
from discord.ext import commands

import config
from delivery import (
    delete_status_message,
    post_status_message,
    radar_type_for,
    report_failure,
    upload_image,
)
from errors import RadarError
from prefectures import find_location
from radar_frames import GifEncoder, RadarCanvas, composite_frames, fetch_all, fetch_image
from yahoo_static_map import build_image_url, frame_times, jst_now

MODES = ("now", "today", "forecast")


def parse_command(text):
    """
    Splits '[location] [mode]' into a Location and a mode.

    Missing or unknown locations fall back to the default location and
    anything other than 'now' or 'today' is a forecast.
    """
    inputs = (text or "").lower().split()
    location = find_location(inputs[0] if inputs else None)
    mode = inputs[1] if len(inputs) >= 2 else "forecast"
    if mode not in MODES:
        mode = "forecast"
    return location, mode


async def send_current_image(channel, location, session, now):
    """Uploads a single radar image for the current time."""
    url = build_image_url(location, config.IMAGE_WIDTH, config.IMAGE_HEIGHT, now)
    try:
        image = await fetch_image(session, url)
        await upload_image(channel, location, radar_type_for("now"), "png", image)
    except RadarError as e:
        logging.error(f"Radar image for {location.key} failed: {e}")
        await report_failure(channel, None, location)


async def send_animation(channel, location, mode, session, now):
    """
    Fetches every frame for `mode`, turns them into a GIF and uploads it.

    Any fetch, decode or upload failure stops the run; the encoder is
    finished exactly once either way.
    """
    width, height = config.IMAGE_WIDTH, config.IMAGE_HEIGHT
    urls = [build_image_url(location, width, height, t) for t in frame_times(mode, now)]
    status_message = await post_status_message(channel, location)

    canvas = RadarCanvas(width, height)
    with GifEncoder(width, height) as encoder:
        try:
            images = await fetch_all(session, urls)
            composite_frames(images, canvas, encoder)
            animation = encoder.finish()
            await upload_image(channel, location, radar_type_for(mode), "gif", animation)
        except RadarError as e:
            logging.error(f"Radar animation ({mode}) for {location.key} failed: {e}")
            await report_failure(channel, status_message, location)
            return

    await delete_status_message(status_message)


async def run_radar_command(channel, text, session, now=None):
    """
    Handles one '[location] [mode]' request end to end and posts the result
    into `channel`. Failures are logged and reported, never raised.
    """
    location, mode = parse_command(text)
    now = now or jst_now()
    logging.info(f"Radar requested: location={location.key} mode={mode} channel={getattr(channel, 'id', None)}")

    if mode == "now":
        await send_current_image(channel, location, session, now)
    else:
        await send_animation(channel, location, mode, session, now)


# --- Discord commands ---

@commands.command(name=config.SLASH_COMMAND_NAME)
async def amesh(ctx, *, text: str = ""):
    """Shows the rain radar around a Japanese prefecture."""
    async with aiohttp.ClientSession() as session:
        await run_radar_command(ctx.channel, text, session)

amesh.help = f"""
**{config.COMMAND_PREFIX}{config.SLASH_COMMAND_NAME} [prefecture] [mode]**

Shows the rain radar around a prefecture.

**Arguments:**

*   `prefecture` (optional): Romanised prefecture name, e.g. 'osaka' or 'hokkaido'. Defaults to '{config.DEFAULT_LOCATION}'.
*   `mode` (optional): 'now' for the current image, 'today' for the past 24 hours, nothing for the next hour's forecast.
"""


@app_commands.command(name=config.SLASH_COMMAND_NAME, description="雨雲レーダーを表示します")
@app_commands.describe(text="[prefecture] [now|today]")
async def amesh_slash(interaction: discord.Interaction, text: str = ""):
    # Discord wants an answer within 3 seconds, the radar takes longer
    await interaction.response.send_message(f"/{config.SLASH_COMMAND_NAME} {text}".strip(), ephemeral=True)
    async with aiohttp.ClientSession() as session:
        await run_radar_command(interaction.channel, text, session)
