"""Exception taxonomy for board generation, storage and entitlements."""


class VisionBoardError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputError(VisionBoardError, ValueError):
    """A required field (selfie, title, description, ...) was empty."""


class AlreadyGeneratingError(VisionBoardError):
    """A generation is already in flight on this pipeline instance."""


class NotSignedInError(VisionBoardError):
    """The operation needs a signed-in user and there is none."""


class BoardLimitReachedError(VisionBoardError):
    """The current user's tier does not allow another board."""


class GenerationFailure(VisionBoardError):
    """A pipeline step failed; no board was produced."""


class NotFoundError(VisionBoardError, LookupError):
    """No board exists with the requested id."""


class PersistenceError(VisionBoardError):
    """The key-value store could not be written."""


class PersistenceWarning(UserWarning):
    """Non-fatal persistence failure. In-memory state was kept as is."""
