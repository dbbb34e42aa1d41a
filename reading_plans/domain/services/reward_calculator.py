"""Koach point awards for logged sessions."""

from ..entities.reading_session import ReadingSession

DEFAULT_POINTS_PER_PAGE = 1


def calculate(session: ReadingSession, points_per_page: int = DEFAULT_POINTS_PER_PAGE) -> int:
    """Points earned for a single session: a fixed number of points per page."""
    return max(0, session.pages_read * points_per_page)
