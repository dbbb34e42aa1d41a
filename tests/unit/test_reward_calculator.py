"""Tests for koach point awards."""

from reading_plans.domain.entities import ReadingSession
from reading_plans.domain.services import reward_calculator


def test_one_point_per_page():
    """By default each page earns one point."""
    session = ReadingSession(book_id="book-1", pages_read=15, minutes_spent=40)
    
    assert reward_calculator.calculate(session) == 15


def test_minutes_do_not_change_award():
    """Only pages count towards the award."""
    quick = ReadingSession(book_id="book-1", pages_read=10)
    slow = ReadingSession(book_id="book-1", pages_read=10, minutes_spent=120)
    
    assert reward_calculator.calculate(quick) == reward_calculator.calculate(slow)


def test_configured_points_per_page():
    """The per-page rate can be configured."""
    session = ReadingSession(book_id="book-1", pages_read=15)
    
    assert reward_calculator.calculate(session, points_per_page=2) == 30
    assert reward_calculator.calculate(session, points_per_page=0) == 0
