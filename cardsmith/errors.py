"""Exception types raised by cardsmith."""


class CardsmithError(Exception):
    """Base class for errors the pipeline reports to its callers."""


class InputContractViolation(CardsmithError):
    """The generation response carried no textual content to extract pairs from."""


class InvalidURLError(CardsmithError, ValueError):
    """The page address is not an absolute http(s) URL."""


class GenerationError(CardsmithError):
    """A flashcard generation request is missing one of its inputs."""
