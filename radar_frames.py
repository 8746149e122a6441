import asyncio
import io
import logging

import aiohttp
from PIL import Image, UnidentifiedImageError

import config
from errors import DecodeError, EncoderStateError, FetchError
from yahoo_static_map import redact_url


# --- Fetching ---

async def fetch_image(session, url):
    """Downloads one radar frame and returns the raw image bytes."""
    logging.debug(f"GET {redact_url(url)}")
    try:
        async with session.get(url) as response:
            if not 200 <= response.status < 300:
                raise FetchError(redact_url(url), f"HTTP {response.status} {response.reason}")
            return await response.read()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise FetchError(redact_url(url), e) from e


async def fetch_all(session, urls):
    """
    Fetches every URL at once and waits for all of them.

    All or nothing: the result is index-aligned with `urls` no matter which
    response arrives first, and the first failure fails the whole batch.
    Requests still in flight are cancelled and no partial list is returned.
    """
    tasks = [asyncio.ensure_future(fetch_image(session, url)) for url in urls]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


# --- Compositing ---

def decode_frame(data, index=0):
    """Decodes fetched bytes into an RGBA image."""
    try:
        image = Image.open(io.BytesIO(data))
        # Palette PNGs behave oddly when pasted, so always work in RGBA
        return image.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(index, e) from e


class RadarCanvas:
    """
    Fixed-size scratch image that every frame of one animation is drawn on.

    Owned by a single command invocation. Each draw overwrites the previous
    frame, so the pixels must be handed to the encoder before the next draw.
    """

    def __init__(self, width, height, background=(255, 255, 255)):
        self.width = width
        self.height = height
        self.background = background
        self.image = Image.new("RGB", (width, height), background)

    @property
    def size(self):
        return (self.width, self.height)

    def draw(self, image):
        """Draws `image` at the origin, scaled to the canvas size."""
        if image.size != self.size:
            image = image.resize(self.size)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        self.image.paste(self.background, (0, 0, self.width, self.height))
        self.image.paste(image, (0, 0), image)


# --- Encoding ---

class GifEncoder:
    """
    Collects frames and writes them out as one animated GIF.

    Args:
        width: Frame width in pixels.
        height: Frame height in pixels.
        repeat: Loop count, 0 loops forever and -1 plays once.
        delay: Delay between frames in ms.
        quality: 1 is the best looking, 10 and above the smallest/fastest.
    """

    def __init__(self, width, height, repeat=config.GIF_REPEAT,
                 delay=config.GIF_DELAY_MS, quality=config.GIF_QUALITY):
        self.width = width
        self.height = height
        self.repeat = repeat
        self.delay = delay
        self.quality = quality
        self.frames = []
        self.finished = False

    def _quantize(self, image):
        if self.quality >= 5:
            method = Image.Quantize.FASTOCTREE
        else:
            method = Image.Quantize.MEDIANCUT
        return image.convert("RGB").quantize(colors=256, method=method)

    def add_frame(self, frame):
        """Snapshots the current pixels of a canvas (or image) as the next frame."""
        if self.finished:
            raise EncoderStateError("add_frame() called after finish()")
        image = getattr(frame, "image", frame)
        if image.size != (self.width, self.height):
            raise ValueError(f"Frame size {image.size} does not match encoder size {(self.width, self.height)}")
        self.frames.append(self._quantize(image))

    def finish(self, discard=False):
        """
        Returns the encoded GIF and releases the frames. May only be called once.
        With discard=True the frames are released without encoding.
        """
        if self.finished:
            raise EncoderStateError("finish() called twice")
        self.finished = True
        frames, self.frames = self.frames, []
        if not frames or discard:
            return b""

        options = {"save_all": True, "append_images": frames[1:], "duration": self.delay}
        if self.repeat >= 0:
            options["loop"] = self.repeat
        buf = io.BytesIO()
        frames[0].save(buf, format="GIF", **options)
        return buf.getvalue()

    def close(self):
        """Finishes the encoder if nobody has yet, dropping any frames unencoded."""
        if not self.finished:
            self.finish(discard=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


def composite_frames(images, canvas, encoder):
    """
    Decodes each fetched frame in order, draws it on the canvas and adds the
    canvas to the encoder straight away.
    """
    for index, data in enumerate(images):
        image = decode_frame(data, index)
        canvas.draw(image)
        encoder.add_frame(canvas)
    logging.info(f"Composited {len(images)} radar frames")
