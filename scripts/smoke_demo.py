#!/usr/bin/env python3
"""Smoke test for the demo deployment.

Drives the full frontend flow against an in-process app in fixture mode:
consent URL -> callback -> campaigns -> analysis.

Usage:
    python scripts/smoke_demo.py

Exit codes:
    0: All checks passed
    1: Some checks failed
"""

from __future__ import annotations

import sys
from pathlib import Path
from urllib.parse import parse_qs, urlparse

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from fastapi.testclient import TestClient  # noqa: E402

from adscore.api.app import create_app  # noqa: E402
from adscore.core.config import Settings  # noqa: E402
from adscore.scoring.config import get_preset  # noqa: E402

DEMO_SETTINGS = Settings(mode="fixture", scoring=get_preset("fixture"))


def check_health(client: TestClient) -> bool:
    """Check that the health endpoint answers."""
    response = client.get("/api/health")
    if response.status_code != 200:
        print(f"FAIL: /api/health returned {response.status_code}")
        return False
    print(f"OK: Health: {response.json()['status']}")
    return True


def obtain_session(client: TestClient) -> str | None:
    """Walk the demo OAuth flow and return the session id."""
    auth_url = client.get("/auth/google").json()["authUrl"]
    callback = urlparse(auth_url)

    response = client.get(f"/auth/callback?{callback.query}", follow_redirects=False)
    if response.status_code != 302:
        print(f"FAIL: Callback returned {response.status_code}")
        return None

    params = parse_qs(urlparse(response.headers["location"]).query)
    session = params.get("session", [None])[0]
    if not session:
        print(f"FAIL: No session in redirect: {response.headers['location']}")
        return None

    print(f"OK: Session created: {session[:6]}...")
    return session


def check_campaigns(client: TestClient, session: str) -> list[dict] | None:
    """Check that campaigns are served for the session."""
    response = client.get("/api/campaigns", params={"session": session})
    if response.status_code != 200:
        print(f"FAIL: /api/campaigns returned {response.status_code}")
        return None

    campaigns = response.json()
    print(f"OK: Found {len(campaigns)} campaigns")
    for campaign in campaigns:
        print(f"    {campaign['name']}: CTR {campaign['ctr']:.2f}%")
    return campaigns


def check_analysis(client: TestClient, session: str, campaigns: list[dict]) -> bool:
    """Check that analysis returns a bounded score and recommendations."""
    response = client.post(
        "/api/analyze", json={"session": session, "campaignData": campaigns}
    )
    if response.status_code != 200:
        print(f"FAIL: /api/analyze returned {response.status_code}")
        return False

    analysis = response.json()
    score = analysis["overallScore"]
    if not 0 <= score <= 100:
        print(f"FAIL: Score out of range: {score}")
        return False

    print(f"OK: Score {score} with {len(analysis['recommendations'])} recommendations")
    for rec in analysis["recommendations"]:
        print(f"    [{rec['type']}/{rec['priority']}] {rec['title']}")
    return True


def main() -> int:
    """Run all smoke checks."""
    print("=" * 60)
    print("adscore demo smoke test")
    print("=" * 60)

    client = TestClient(create_app(settings=DEMO_SETTINGS))
    checks_passed = 0
    checks_failed = 0

    print("\n[1/4] Checking health...")
    if check_health(client):
        checks_passed += 1
    else:
        checks_failed += 1

    print("\n[2/4] Checking OAuth flow...")
    session = obtain_session(client)
    if session is None:
        checks_failed += 1
        print("\n" + "=" * 60)
        print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
        print("=" * 60)
        return 1
    checks_passed += 1

    print("\n[3/4] Checking campaigns...")
    campaigns = check_campaigns(client, session)
    if campaigns is not None:
        checks_passed += 1
    else:
        checks_failed += 1
        campaigns = []

    print("\n[4/4] Checking analysis...")
    if check_analysis(client, session, campaigns):
        checks_passed += 1
    else:
        checks_failed += 1

    # Summary
    print("\n" + "=" * 60)
    if checks_failed == 0:
        print(f"RESULT: ALL PASSED ({checks_passed} checks)")
        print("=" * 60)
        return 0
    else:
        print(f"RESULT: {checks_passed} passed, {checks_failed} failed")
        print("=" * 60)
        return 1


if __name__ == "__main__":
    sys.exit(main())
