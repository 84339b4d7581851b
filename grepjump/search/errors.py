"""Exceptions raised by the search core."""


class GrepJumpError(Exception):
    """Base class for user-visible search failures."""


class NoSuitableBackendError(GrepJumpError):
    """No backend in the priority list is both enabled and on PATH."""

    def __init__(self, candidates):
        self.candidates = list(candidates)
        tried = ", ".join(self.candidates) or "none configured"
        super().__init__(f"No suitable search backend found (tried: {tried})")


class InvalidCandidateError(GrepJumpError):
    """The selected candidate line is not PATH:LINE:CONTENT."""

    def __init__(self, candidate: str):
        self.candidate = candidate
        super().__init__(f"Cannot jump to unparseable candidate: {candidate[:80]!r}")
