"""Media processing interface."""

from fitjourney.domain.value import ImageConstraints, MediaPayload


class MediaProcessor:
    """Turns a locally captured image into an uploadable payload."""

    async def process(
        self, local_ref: str, constraints: ImageConstraints
    ) -> MediaPayload:
        """Downsize and compress an image.

        Args:
            local_ref: Path or file:// URI of the captured image
            constraints: Target width and compression quality

        Returns:
            Encoded JPEG payload

        Raises:
            MediaError: If the image cannot be read or decoded
        """
        raise NotImplementedError
