#!/usr/bin/env python3
"""
Validate the BookATeeTime DOM schema against captured HTML fixtures.

This script:
1. Collects the selectors and data attributes from bookateetime_dom_schema.py
2. Tests each one against every bookateetime_*.html fixture
3. Reports which selectors work and which are broken

Usage:
    python scripts/validate_selectors.py
"""

import json
import sys
from dataclasses import asdict
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from bs4 import BeautifulSoup

from teetimes.providers.bookateetime_dom_schema import DOM

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"


def load_fixtures() -> dict[str, BeautifulSoup]:
    """Load every BookATeeTime HTML fixture."""
    return {
        path.stem: BeautifulSoup(path.read_text(encoding="utf-8"), "html.parser")
        for path in sorted(FIXTURES_DIR.glob("bookateetime_*.html"))
    }


def test_selector(soup: BeautifulSoup, selector: str) -> tuple[int, list[str]]:
    """Test a CSS selector against HTML and return match count and sample text."""
    try:
        elements = soup.select(selector)
    except Exception as e:  # noqa: BLE001 - report any selector syntax error
        return -1, [f"ERROR: {e}"]

    samples = []
    for el in elements[:3]:
        text = el.get_text(strip=True)[:50]
        classes = el.get("class", [])
        class_str = ".".join(classes) if classes else ""
        samples.append(f"<{el.name} class='{class_str}'>{text}...")
    return len(elements), samples


def count_attribute(soup: BeautifulSoup, attribute: str) -> int:
    """Count tee time cards carrying a data attribute."""
    return sum(1 for card in soup.select(DOM.TEE_TIME.tee_time) if card.has_attr(attribute))


def validate_selectors() -> None:
    """Main validation routine."""
    print("=" * 70)
    print("DOM Selector Validation Report")
    print("=" * 70)

    fixtures = load_fixtures()
    if not fixtures:
        print(f"No fixtures found in {FIXTURES_DIR}. Run capture_html_snapshots.py first.")
        sys.exit(1)

    results: dict[str, list] = {
        "working": [],
        "broken": [],
        "errors": [],
    }

    for fixture_name, soup in fixtures.items():
        print(f"\n{'=' * 70}")
        print(f"Fixture: {fixture_name}")
        print("=" * 70)

        for name, selector in asdict(DOM.TEE_TIME).items():
            count, samples = test_selector(soup, selector)

            if count > 0:
                status = "[OK] FOUND"
                results["working"].append((fixture_name, name, selector, count))
            elif count == 0:
                status = "[X] NOT FOUND"
                results["broken"].append((fixture_name, name, selector))
            else:
                status = "[!] ERROR"
                results["errors"].append((fixture_name, name, selector, samples[0]))

            print(f"\n  {name}:")
            print(f"    Selector: {selector}")
            print(f"    Status: {status} ({count} matches)")
            for sample in samples if count > 0 else []:
                print(f"    Sample: {sample}")

        card_count = len(soup.select(DOM.TEE_TIME.tee_time))
        for name, attribute in asdict(DOM.ATTRIBUTES).items():
            if attribute == DOM.ATTRIBUTES.href:
                continue
            count = count_attribute(soup, attribute)
            print(f"\n  {name}: {count}/{card_count} cards carry {attribute}")
            if card_count and count < card_count:
                results["broken"].append((fixture_name, name, attribute))

    # Summary
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)

    print(f"\n[OK] Working selectors: {len(results['working'])}")
    print(f"[X]  Broken selectors:  {len(results['broken'])}")
    print(f"[!]  Error selectors:   {len(results['errors'])}")

    if results["broken"]:
        print("\n" + "-" * 70)
        print("BROKEN SELECTORS (need attention):")
        print("-" * 70)
        for fixture_name, name, selector in results["broken"]:
            print(f"  [{fixture_name}] {name}: {selector}")

    if results["errors"]:
        print("\n" + "-" * 70)
        print("ERROR SELECTORS (invalid syntax?):")
        print("-" * 70)
        for fixture_name, name, selector, error in results["errors"]:
            print(f"  [{fixture_name}] {name}: {selector}")
            print(f"    Error: {error}")

    report_path = FIXTURES_DIR / "selector_report.json"
    report = {
        "working": [
            {"fixture": f, "name": n, "selector": s, "count": cnt}
            for f, n, s, cnt in results["working"]
        ],
        "broken": [{"fixture": f, "name": n, "selector": s} for f, n, s in results["broken"]],
        "errors": [
            {"fixture": f, "name": n, "selector": s, "error": e}
            for f, n, s, e in results["errors"]
        ],
    }
    report_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
    print(f"\nReport saved to: {report_path}")


if __name__ == "__main__":
    validate_selectors()
