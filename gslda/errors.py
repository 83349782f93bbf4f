"""Error types raised by the sampler and its forward index."""


class LDAError(Exception):
    """Base error for all gslda failures."""


class ConfigurationError(LDAError, ValueError):
    """Invalid model or run parameter."""


class IndexContractError(LDAError):
    """The forward index returned inconsistent or missing data."""


class InvariantError(LDAError):
    """Internal count bookkeeping is broken; the sampler must be discarded."""
