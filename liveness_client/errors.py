"""Error kinds raised by the liveness client components.

Every component raises one of these and leaves the decision about exit codes
to ``liveness_client.main``.
"""


class LivenessClientError(Exception):
    """Base class for all fatal client errors."""


class ConfigurationError(LivenessClientError):
    """Required settings are missing or the settings file is unusable."""


class ImageError(LivenessClientError):
    """An image file could not be read."""

    def __init__(self, path, message):
        super().__init__(message)
        self.path = path


class UnsupportedImageTypeError(ImageError):
    """The sniffed content type of an image is neither JPEG nor PNG."""

    def __init__(self, path, mime_type):
        super().__init__(path, f"mime type {mime_type} for {path} is not supported.")
        self.mime_type = mime_type


class TransportError(LivenessClientError):
    """The request never produced an HTTP response."""


class ServiceStatusError(LivenessClientError):
    """The service answered with a status other than 200."""

    def __init__(self, status_code):
        super().__init__(f"Received http response code != 200: {status_code}")
        self.status_code = status_code
