"""
Application-level exceptions.

Every error carries a stable ``code`` so callers (CLI, an HTTP layer) can map
failures to responses without matching on message text.

Fatal: InvalidArgument, IndexServiceError, AggregationFailed.
Absorbed per asset by the enricher: PassFetchFailure.
"""

from __future__ import annotations


class VerxioError(Exception):
    """Base class for all backend_verxio errors."""

    code = "VERXIO_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message, "code": self.code}


class InvalidArgument(VerxioError):
    """Missing, blank or malformed address; raised before any I/O."""

    code = "INVALID_ARGUMENT"


class IndexServiceError(VerxioError):
    """Transport or malformed-payload failure talking to the asset index."""

    code = "INDEX_SERVICE_ERROR"


class TooManyPages(IndexServiceError):
    """Pagination did not reach an empty page within the configured ceiling."""

    code = "TOO_MANY_PAGES"

    def __init__(self, collection_address: str, max_pages: int) -> None:
        super().__init__(
            f"Asset index returned more than {max_pages} pages for collection {collection_address}"
        )
        self.collection_address = collection_address
        self.max_pages = max_pages


class PassFetchFailure(VerxioError):
    """Pass store lookup failed for one asset or program."""

    code = "PASS_FETCH_FAILED"


class PassNotFound(PassFetchFailure):
    code = "PASS_NOT_FOUND"


class ProgramNotFound(PassFetchFailure):
    code = "PROGRAM_NOT_FOUND"


class AggregationFailed(VerxioError):
    """
    Fatal failure while assembling a leaderboard or member listing.

    The underlying exception is chained (``__cause__``) and kept on ``cause``.
    """

    code = "AGGREGATION_FAILED"

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class LeaderboardBuildFailed(AggregationFailed):
    code = "LEADERBOARD_BUILD_FAILED"


class MembersBuildFailed(AggregationFailed):
    code = "MEMBERS_BUILD_FAILED"
