"""Exception types raised across the package."""


class FoodLensError(Exception):
    """Base class for errors raised by foodlens."""


class CatalogLoadError(FoodLensError):
    """The nutrition catalog could not be read at startup (fatal)."""


class VisionError(FoodLensError):
    """The image classifier could not be reached or rejected the request."""


class TranslationError(FoodLensError):
    """A translation request failed; callers fall back to the source text."""


class CredentialsError(FoodLensError):
    """Google credentials are missing, malformed, or could not be refreshed."""
