"""
Exception hierarchy for the element description workflow.

Every error raised by the pipeline derives from PigeonError so the HTTP layer
can map it to a status code in one place.
"""
from typing import Optional


class PigeonError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(PigeonError):
    """A required setting (endpoint, API key) is missing."""

    def __init__(self, setting_name: str):
        self.setting_name = setting_name
        super().__init__(
            f"Required setting {setting_name} was not present"
        )


class InvalidUploadError(PigeonError):
    """An upload is missing a field the requested operation needs."""


class InvalidDataUriError(PigeonError):
    """The uploaded image is not a data:<mime>;base64,<payload> URI."""


class ImageDecodeError(PigeonError):
    """Image bytes could not be decoded."""


class EmptyCropError(PigeonError):
    """The crop rectangle has no area (element lies outside the screenshot)."""


class BoundingBoxFormatError(PigeonError):
    """The OCR service returned a bounding box that is not 'L,T,W,H'."""

    def __init__(self, raw_box: str):
        self.raw_box = raw_box
        super().__init__(f"Malformed OCR bounding box: {raw_box!r}")


class RemoteServiceError(PigeonError):
    """A remote service (OCR or completion) failed with a non-retryable status."""

    def __init__(
        self,
        service: str,
        message: str,
        status_code: Optional[int] = None
    ):
        self.service = service
        self.status_code = status_code
        detail = f"{service} request failed"
        if status_code is not None:
            detail += f" with status {status_code}"
        super().__init__(f"{detail}: {message}")


class PromptTooLongError(PigeonError):
    """The completion provider rejected a prompt as too long.

    Raised by completion clients; the inference service consumes it to drive
    its shrink loop and never lets it escape.
    """


class PromptTooLargeError(PigeonError):
    """The prompt could not be shrunk enough for the provider to accept it."""


class PromptBuildError(PigeonError):
    """A prompt was requested from inconsistent inputs."""


class EmptySeedListError(PromptBuildError):
    """No seed examples were supplied."""

    def __init__(self):
        super().__init__("Provided no seed prompts to use as an example")


class UnlabeledSeedError(PromptBuildError):
    """A seed example has no label."""

    def __init__(self, seed_id: int):
        self.seed_id = seed_id
        super().__init__(
            f"Used seed with id {seed_id} which didn't have an inference"
        )


class SeedSelectionError(PigeonError):
    """Seed ids are non-positive or duplicated."""


class RecordNotFoundError(PigeonError):
    """No stored record with the requested id."""

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"Image with id {record_id} not found")
