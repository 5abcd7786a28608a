"""Pillow-based media processor.

Reads a captured image from local storage, applies its EXIF orientation,
downsizes it to the target width and re-encodes it as JPEG.
"""

import asyncio
import io
from pathlib import Path
from urllib.parse import unquote, urlparse

import logfire
from PIL import Image, ImageOps, UnidentifiedImageError

from fitjourney.domain.error import MediaError
from fitjourney.domain.service.media_service import MediaProcessor
from fitjourney.domain.value import ImageConstraints, MediaPayload


def resolve_local_path(local_ref: str) -> Path:
    """Turn a path or `file://` URI into a filesystem path."""
    if local_ref.startswith("file://"):
        return Path(unquote(urlparse(local_ref).path))
    return Path(local_ref).expanduser()


class PillowMediaProcessor(MediaProcessor):
    """Media processor backed by Pillow.

    Images narrower than the target width keep their size; only larger
    images are downsized, preserving the aspect ratio.
    """

    async def process(
        self, local_ref: str, constraints: ImageConstraints
    ) -> MediaPayload:
        """Downsize and compress an image off the event loop."""
        if not local_ref or not local_ref.strip():
            raise MediaError("No image to process")

        with logfire.span(
            "media.process", max_width=constraints.max_width, quality=constraints.quality
        ):
            payload = await asyncio.to_thread(self._encode, local_ref, constraints)
            logfire.info(
                "Image processed",
                width=payload.width,
                height=payload.height,
                size=payload.size,
            )
            return payload

    @staticmethod
    def _encode(local_ref: str, constraints: ImageConstraints) -> MediaPayload:
        path = resolve_local_path(local_ref)
        try:
            with Image.open(path) as source:
                img = ImageOps.exif_transpose(source)

                if img.width > constraints.max_width:
                    height = max(1, round(img.height * constraints.max_width / img.width))
                    img = img.resize(
                        (constraints.max_width, height), Image.Resampling.LANCZOS
                    )

                if img.mode != "RGB":
                    img = img.convert("RGB")

                buffer = io.BytesIO()
                img.save(
                    buffer,
                    format="JPEG",
                    quality=constraints.jpeg_quality,
                    optimize=True,
                )
                return MediaPayload(
                    data=buffer.getvalue(),
                    content_type="image/jpeg",
                    width=img.width,
                    height=img.height,
                )
        except FileNotFoundError:
            raise MediaError(f"Image not found: {path.name}")
        except UnidentifiedImageError:
            raise MediaError("The selected file is not a supported image")
        except Image.DecompressionBombError:
            raise MediaError("The selected image is too large to process")
        except (OSError, ValueError) as e:
            raise MediaError(f"Could not process image: {e}")
