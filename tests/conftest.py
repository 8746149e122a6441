"""Shared fakes for the radar bot tests (no network, no Discord)."""

import asyncio
import io
import re
from types import SimpleNamespace

import aiohttp
import discord
import pytest
from PIL import Image

import config


def png_bytes(color, size=(config.IMAGE_WIDTH, config.IMAGE_HEIGHT), mode="RGB"):
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


def frame_color(index):
    return ((index * 10) % 256, (255 - index * 10) % 256, (index * 37) % 256)


def radar_date(url):
    return re.search(r"date:(\d{12})", url).group(1)


def forbidden():
    return discord.Forbidden(SimpleNamespace(status=403, reason="Forbidden"), "Missing Permissions")


class FakeResponse:
    def __init__(self, body=b"", status=200, reason="OK", delay=0, error=None):
        self.body = body
        self.status = status
        self.reason = reason
        self.delay = delay
        self.error = error

    async def __aenter__(self):
        await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def read(self):
        return self.body


class FakeSession:
    """Stands in for aiohttp.ClientSession; `responder(url, index)` builds each response."""

    def __init__(self, responder):
        self.responder = responder
        self.requested = []

    def get(self, url):
        index = len(self.requested)
        self.requested.append(url)
        return self.responder(url, index)


def colored_frames(delay_for=lambda index: 0):
    """Responder returning a distinct solid color per request index."""
    def responder(url, index):
        return FakeResponse(png_bytes(frame_color(index)), delay=delay_for(index))
    return responder


def failing_at(bad_index, error=None):
    def responder(url, index):
        if index == bad_index:
            return FakeResponse(error=error or aiohttp.ClientConnectionError("connection reset"))
        return FakeResponse(png_bytes(frame_color(index)))
    return responder


class FakeMessage:
    def __init__(self, message_id, content=None, embed=None, file=None, fail_delete=False,
                 fail_edit=False, error=forbidden):
        self.id = message_id
        self.content = content
        self.embed = embed
        self.file = file
        self.fail_delete = fail_delete
        self.fail_edit = fail_edit
        self.error = error
        self.deleted = False
        self.edits = []

    async def delete(self):
        if self.fail_delete:
            raise self.error()
        self.deleted = True

    async def edit(self, content=None, embed=None):
        if self.fail_edit:
            raise self.error()
        self.edits.append(content)
        self.content = content


class FakeChannel:
    """Records what the bot sends; the first `fail_sends` plain sends raise `error()` (Forbidden by default)."""

    def __init__(self, fail_sends=0, fail_uploads=False, fail_delete=False, fail_edit=False, error=forbidden):
        self.id = 1234
        self.fail_sends = fail_sends
        self.fail_uploads = fail_uploads
        self.fail_delete = fail_delete
        self.fail_edit = fail_edit
        self.error = error
        self.messages = []
        self.attempts = 0

    async def send(self, content=None, *, embed=None, file=None):
        self.attempts += 1
        if file is not None and self.fail_uploads:
            raise self.error()
        if file is None and self.fail_sends > 0:
            self.fail_sends -= 1
            raise self.error()
        message = FakeMessage(len(self.messages) + 1, content, embed, file, fail_delete=self.fail_delete,
                              fail_edit=self.fail_edit, error=self.error)
        self.messages.append(message)
        return message

    @property
    def uploads(self):
        return [m for m in self.messages if m.file is not None]


@pytest.fixture
def channel():
    return FakeChannel()


def connection_reset():
    return aiohttp.ClientOSError(104, "Connection reset by peer")
