"""
Set up a local environment with sample data and run the backend server.

This script:
1. Adds a sample book to the LocalBookProvider
2. Creates a sample reading plan and logs two sessions against it
3. Starts the FastAPI backend server

Requires the default local storage backend.
"""

import asyncio
from datetime import date

from reading_plans.application.api import app, controller
from reading_plans.domain.entities import BookMetadata, GoalMode

SAMPLE_USER_ID = "12345678-1234-5678-1234-567812345678"


async def setup_sample_data():
    """Set up a sample book, plan and sessions."""
    
    print("=" * 60)
    print("Setting up sample data...")
    print("=" * 60)
    
    # 1. Add a sample book
    sample_book = BookMetadata(
        book_id="book-001",
        title="The Bathtub Safari",
        author="Sample Author",
        total_pages=250,
    )
    controller.book_provider.add_book(sample_book)
    print(f"\n✓ Added book: {sample_book.title}")
    print(f"  - Book ID: {sample_book.book_id}")
    print(f"  - Pages: {sample_book.total_pages}")
    
    # 2. Create a plan: 25 pages a day
    plan = await controller.create_plan(
        user_id=SAMPLE_USER_ID,
        book_id=sample_book.book_id,
        title=f"Plan for {sample_book.title}",
        start_date=date.today(),
        goal_mode=GoalMode.PAGES_PER_DAY,
        pages_per_day=25,
    )
    print(f"\n✓ Created plan: {plan['title']}")
    print(f"  - Plan ID: {plan['id']}")
    print(f"  - Daily goal: {plan['daily_goal']} pages until {plan['end_date']}")
    
    # 3. Log a couple of sessions
    for pages, minutes in ((25, 30), (30, 40)):
        result = await controller.log_session(
            book_id=sample_book.book_id,
            plan_id=plan["id"],
            pages_read=pages,
            minutes_spent=minutes,
            user_id=SAMPLE_USER_ID,
        )
        print(f"\n✓ Logged {pages} pages, earned {result['koach_earned']} koach")
    
    progress = await controller.get_plan(plan["id"])
    print(f"\nProgress: {progress['current_page']}/{progress['total_pages']} ({progress['progress_percentage']}%)")
    
    print("\n" + "=" * 60)
    print("Sample data setup complete!")
    print("=" * 60)
    print("\nYou can now:")
    print(f"1. GET http://localhost:8000/reading-plans?user_id={SAMPLE_USER_ID}")
    print(f"2. POST http://localhost:8000/reading-plans/{plan['id']}/progress")
    print(f"3. GET http://localhost:8000/koach?user_id={SAMPLE_USER_ID}")
    print("\n" + "=" * 60 + "\n")


def run_server():
    """Run the FastAPI server."""
    import uvicorn
    
    # Setup sample data first
    asyncio.run(setup_sample_data())
    
    # Start the server
    print("Starting FastAPI server on http://localhost:8000")
    print("Press Ctrl+C to stop\n")
    
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )


if __name__ == "__main__":
    run_server()
