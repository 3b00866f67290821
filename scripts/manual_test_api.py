#!/usr/bin/env python3
"""
Quick test script to verify the LeadDesk API
Run the server first: uvicorn leaddesk.main:app --reload --port 8080
"""

import requests

BASE_URL = "http://127.0.0.1:8080"

def test_api():
    print("Testing LeadDesk API...\n")

    # Test 1: Root endpoint
    print("1. Testing root endpoint...")
    response = requests.get(f"{BASE_URL}/")
    print(f"   Status: {response.status_code}")
    print(f"   Response: {response.json()}\n")

    # Test 2: List leads
    print("2. Testing lead list...")
    response = requests.get(f"{BASE_URL}/leads")
    leads = response.json()
    print(f"   Status: {response.status_code}")
    print(f"   Leads: {len(leads)} found\n")

    # Test 3: Add a lead (backend may be down; the lead is still cached)
    print("3. Testing lead creation...")
    response = requests.post(
        f"{BASE_URL}/leads",
        json={"name": "Zed", "email": "zed@example.com", "budget": 1000, "source": "Referral"}
    )
    data = response.json()
    print(f"   Status: {response.status_code}")
    print(f"   Result: {data}\n")

    # Test 4: Log an activity and a note on the newest lead
    print("4. Testing activity and note...")
    newest = requests.get(f"{BASE_URL}/leads").json()[0]
    requests.post(
        f"{BASE_URL}/leads/{newest['id']}/activities",
        json={"type": "Call", "description": "Intro call"}
    )
    response = requests.post(
        f"{BASE_URL}/leads/{newest['id']}/notes",
        json={"text": "Wants a proposal next week"}
    )
    lead = response.json()
    print(f"   Activities: {len(lead['activities'])}")
    print(f"   Notes: {lead['notes']!r}\n")

    # Test 5: Sync with the scoring backend
    print("5. Testing backend sync...")
    response = requests.post(f"{BASE_URL}/leads/sync")
    print(f"   Status: {response.status_code}")
    print(f"   Leads after sync: {len(response.json())}\n")

    # Test 6: Analytics
    print("6. Testing analytics...")
    response = requests.get(f"{BASE_URL}/analytics/summary")
    print(f"   Summary: {response.json()}")
    response = requests.get(f"{BASE_URL}/analytics/sources")
    print(f"   Sources: {response.json()}\n")

    print("✅ All API tests completed!")

if __name__ == "__main__":
    try:
        test_api()
    except requests.exceptions.ConnectionError:
        print("❌ Error: Could not connect to server.")
        print("Please start the server first:")
        print("  uvicorn leaddesk.main:app --reload --port 8080")
