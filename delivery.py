import asyncio
import io
import logging

import aiohttp
import discord

from errors import ChatApiError

# Discord rejections plus transport failures that discord.py lets through
CHAT_ERRORS = (discord.HTTPException, aiohttp.ClientError, OSError, asyncio.TimeoutError)

# Mode -> how the radar is described in the upload caption
RADAR_TYPES = {
    "now": "現在の",
    "today": "直近一日分の",
    "forecast": "予測",
}


def radar_type_for(mode):
    return RADAR_TYPES.get(mode, RADAR_TYPES["forecast"])


def loading_text(location):
    return f"🔍 現在、{location.kanji_name}付近の雨雲レーダーの情報を取得中です... ⛈️"


def upload_caption(location, radar_type):
    return f"{location.kanji_name}付近の{radar_type}雨雲レーダーを表示しています"


async def post_status_message(channel, location):
    """
    Posts the "fetching radar..." notice before the slow part starts.

    The first attempt carries an embed. If Discord refuses it (usually a
    missing Embed Links permission) it is retried once as plain text. Returns
    the posted message, or None if both attempts failed; never raises.
    """
    text = loading_text(location)
    try:
        message = await channel.send(text, embed=discord.Embed(description=text, color=discord.Color.blue()))
        logging.debug(f"Posted status message {message.id}")
        return message
    except CHAT_ERRORS as e:
        logging.warning(f"Could not post status message with embed: {e}")

    try:
        message = await channel.send(text)
        logging.debug(f"Posted plain status message {message.id}")
        return message
    except CHAT_ERRORS as e:
        logging.error(f"Could not post status message, continuing without it: {e}")
        return None


async def upload_image(channel, location, radar_type, filetype, data):
    """
    Uploads the finished radar image (png) or animation (gif).

    Raises:
        ChatApiError: The upload was rejected.
    """
    filename = f"amesh_{location.key}.{filetype}"
    try:
        message = await channel.send(
            content=upload_caption(location, radar_type),
            file=discord.File(io.BytesIO(data), filename=filename),
        )
    except CHAT_ERRORS as e:
        raise ChatApiError("upload", e) from e
    logging.info(f"Uploaded {filename} ({len(data)} bytes)")
    return message


async def delete_status_message(message):
    """Removes the status message. A stale one is fine, so failures are only logged."""
    if message is None:
        return
    try:
        await message.delete()
    except CHAT_ERRORS as e:
        logging.warning(f"Could not delete status message {message.id}: {e}")


async def report_failure(channel, status_message, location):
    """Tells the channel the radar could not be fetched, replacing the status message if there is one."""
    text = f"⚠️ {location.kanji_name}付近の雨雲レーダーを取得できませんでした。しばらくしてからもう一度お試しください。"
    try:
        if status_message is not None:
            await status_message.edit(content=text, embed=None)
        else:
            await channel.send(text)
    except CHAT_ERRORS as e:
        logging.error(f"Could not report failure to channel: {e}")
