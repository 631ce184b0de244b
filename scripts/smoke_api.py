#!/usr/bin/env python3
"""Smoke test for the translator API endpoints.

Run the server first:
  cd src && python main.py

Then run this script:
  python scripts/smoke_api.py
"""

import json
import sys

try:
    import httpx
except ImportError:
    print("Please install httpx: pip install httpx")
    sys.exit(1)

BASE_URL = "http://localhost:8000"


def check_endpoint(name: str, method: str, path: str, data: dict | None = None) -> bool:
    """Call an API endpoint and print the result."""
    print(f"\n{'='*60}")
    print(f"CHECK: {name}")
    print(f"{'='*60}")

    url = f"{BASE_URL}{path}"
    print(f"{method} {path}")
    if data:
        print(f"Request: {json.dumps(data, ensure_ascii=False)}")

    try:
        with httpx.Client(timeout=30) as client:
            if method == "GET":
                response = client.get(url)
            else:
                response = client.post(url, json=data)
    except httpx.ConnectError:
        print("❌ Could not connect to server. Is it running?")
        return False

    print(f"\nStatus: {response.status_code}")
    print(f"Response:\n{json.dumps(response.json(), ensure_ascii=False, indent=2)}")

    return response.status_code == 200


def main():
    print("="*60)
    print("JE TRANSLATOR API SMOKE TEST")
    print("="*60)

    if not check_endpoint("Health Check", "GET", "/"):
        print("\n⚠️  Server not running. Start with: cd src && python main.py")
        return

    check_endpoint(
        "Translate - Simple Sentence",
        "POST", "/translate",
        {"text": "猫が好きです"}
    )

    check_endpoint(
        "Report - Sentence",
        "POST", "/report",
        {"text": "日本語を勉強しています"}
    )

    # Unknown compound should be split into its parts
    check_endpoint(
        "Report - Decomposed Phrase",
        "POST", "/report",
        {"words": ["猫犬", "上"]}
    )

    check_endpoint(
        "Tokenize - Debug",
        "POST", "/tokenize",
        {"text": "言われてみれば分かる"}
    )

    print("\n" + "="*60)
    print("SMOKE TEST COMPLETE")
    print("="*60)


if __name__ == "__main__":
    main()
