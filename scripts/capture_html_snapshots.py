#!/usr/bin/env python3
"""
Capture HTML snapshots of BookATeeTime search pages for testing.

This script:
1. Picks the bookateetime courses from the course catalog
2. Fetches each course's search results page for a date a week out
3. Saves the raw HTML and request metadata as test fixtures

Usage:
    python scripts/capture_html_snapshots.py [course_id ...]
"""

import json
import sys
import time
from datetime import date, timedelta
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import httpx

from teetimes.config import settings
from teetimes.models.schemas import CourseSource
from teetimes.providers.bookateetime import SEARCH_URL, SELECTED_HOLES
from teetimes.services.course_service import load_courses

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

DAYS_AHEAD = 7
PLAYERS = 4


def save_snapshot(response: httpx.Response, name: str, metadata: dict | None = None) -> Path:
    """Save HTML snapshot and metadata."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)

    html_path = FIXTURES_DIR / f"{name}.html"
    html_path.write_text(response.text, encoding="utf-8")
    print(f"  Saved: {html_path}")

    if metadata:
        meta_path = FIXTURES_DIR / f"{name}.meta.json"
        metadata["url"] = str(response.url)
        metadata["status_code"] = response.status_code
        metadata["captured_at"] = time.strftime("%Y-%m-%d %H:%M:%S")
        meta_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")
        print(f"  Saved: {meta_path}")

    return html_path


def capture_snapshots(course_ids: list[str]) -> None:
    """Main capture routine."""
    print("=" * 60)
    print("BookATeeTime HTML Snapshot Capture")
    print("=" * 60)

    if not course_ids:
        course_ids = [
            course.external_id
            for course in load_courses(settings.catalog_path)
            if course.source == CourseSource.BOOKATEETIME.value
        ]
    if not course_ids:
        print("ERROR: No bookateetime courses in the catalog and none given.")
        sys.exit(1)

    target_date = (date.today() + timedelta(days=DAYS_AHEAD)).isoformat()
    print(f"Target date: {target_date}")

    with httpx.Client(timeout=settings.request_timeout_seconds, follow_redirects=True) as client:
        for index, course_id in enumerate(course_ids, start=1):
            print(f"\n[{index}/{len(course_ids)}] Capturing course {course_id}...")
            try:
                response = client.get(
                    SEARCH_URL.format(course_id=course_id, date=target_date),
                    params={"selectedPlayers": PLAYERS, "selectedHoles": SELECTED_HOLES},
                    headers={"User-Agent": settings.user_agent},
                )
            except httpx.HTTPError as e:
                print(f"  ERROR: {e!r}")
                continue

            save_snapshot(
                response,
                f"bookateetime_search_{course_id}",
                {"course_id": course_id, "date": target_date, "players": PLAYERS},
            )

    print("\n" + "=" * 60)
    print("Snapshot capture complete!")
    print(f"Fixtures saved to: {FIXTURES_DIR}")
    print("=" * 60)


if __name__ == "__main__":
    capture_snapshots(sys.argv[1:])
