#!/usr/bin/env python3
"""Generate saved Overpass API payload fixtures for adapter testing.

This script creates all test fixtures required by the resource adapter test
cases. Fixtures are small synthetic payloads shaped like real Overpass
responses (``out center`` output) - not real OSM data.

Usage:
    python scripts/gen_fixtures.py

Output:
    tests/fixtures/*.json (and payload.txt)

Dependencies:
    This script imports from shared/fixtures_expected.py (not tests/) to avoid
    circular dependencies between scripts and tests packages.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from shared.fixtures_expected import EXPECTED_FIXTURE_COUNT, EXPECTED_FIXTURES

# Output directory
FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"

# =============================================================================
# Standard Window Configuration
# =============================================================================
# All payload elements fall inside one Taipei window so tests can feed the
# loaded points straight into the pipeline.
# - Latitude:  [25.02, 25.07]
# - Longitude: [121.50, 121.57]
STD_SOUTH, STD_NORTH = 25.02, 25.07
STD_WEST, STD_EAST = 121.50, 121.57

_HEADER: dict[str, Any] = {
    "version": 0.6,
    "generator": "Overpass API (synthetic fixture)",
}


def ensure_dir() -> None:
    """Ensure fixtures directory exists."""
    FIXTURES_DIR.mkdir(parents=True, exist_ok=True)
    print(f"Output directory: {FIXTURES_DIR}")


def node(element_id: int, lat: float, lon: float, tags: dict[str, str] | None) -> dict[str, Any]:
    element: dict[str, Any] = {"type": "node", "id": element_id, "lat": lat, "lon": lon}
    if tags is not None:
        element["tags"] = tags
    return element


def way(element_id: int, center: tuple[float, float] | None, tags: dict[str, str]) -> dict[str, Any]:
    element: dict[str, Any] = {"type": "way", "id": element_id}
    if center is not None:
        element["center"] = {"lat": center[0], "lon": center[1]}
    element["tags"] = tags
    return element


def write_payload(name: str, payload: Any) -> None:
    """Write a JSON payload with stable formatting."""
    text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
    (FIXTURES_DIR / name).write_text(text, encoding="utf-8")


# =============================================================================
# Happy path: every supported type, nodes and ways, two skipped elements
# =============================================================================
def gen_overpass_mixed() -> None:
    elements = [
        node(
            1001,
            25.04,
            121.52,
            {"amenity": "hospital", "name": "臺大醫院", "addr:full": "臺北市中正區中山南路7號"},
        ),
        node(
            1002,
            25.045,
            121.53,
            {
                "amenity": "clinic",
                "name:en": "Riverside Clinic",
                "addr:city": "臺北市",
                "addr:district": "大安區",
                "addr:street": "和平東路",
                "addr:housenumber": "12號",
            },
        ),
        way(2001, (25.05, 121.54), {"amenity": "library", "name": "市立圖書館"}),
        node(
            1003,
            25.035,
            121.545,
            {"amenity": "social_facility", "social_facility": "nursing_home", "name": "長青養護中心"},
        ),
        node(1004, 25.042, 121.555, {"amenity": "pharmacy"}),
        way(2002, (25.06, 121.515), {"amenity": "community_centre", "name:zh": "社區活動中心"}),
        node(1005, 25.03, 121.525, {"amenity": "kindergarten"}),
        node(1006, 25.038, 121.535, {"amenity": "school"}),
        way(2003, None, {"amenity": "hospital"}),
    ]
    write_payload("overpass_mixed.json", {**_HEADER, "elements": elements})


def gen_overpass_unsupported_only() -> None:
    elements = [
        node(3001, 25.04, 121.52, {"amenity": "school"}),
        way(3002, None, {"amenity": "hospital"}),
        node(3003, 25.05, 121.53, None),
    ]
    write_payload("overpass_unsupported_only.json", {**_HEADER, "elements": elements})


def gen_overpass_no_elements() -> None:
    write_payload("overpass_no_elements.json", dict(_HEADER))


def gen_overpass_malformed() -> None:
    (FIXTURES_DIR / "overpass_malformed.json").write_text(
        '{"version": 0.6, "elements": [\n', encoding="utf-8"
    )


def gen_empty() -> None:
    (FIXTURES_DIR / "empty.json").write_bytes(b"")


def gen_payload_txt() -> None:
    (FIXTURES_DIR / "payload.txt").write_text("not a json payload\n", encoding="utf-8")


def main() -> int:
    ensure_dir()

    gen_overpass_mixed()
    gen_overpass_unsupported_only()
    gen_overpass_no_elements()
    gen_overpass_malformed()
    gen_empty()
    gen_payload_txt()

    # Verify generated fixtures match expected list exactly
    found_set = {f.name for f in FIXTURES_DIR.iterdir() if f.is_file()}
    expected_set = set(EXPECTED_FIXTURES)

    missing = expected_set - found_set
    extra = found_set - expected_set
    if missing or extra:
        print("ERROR: Fixture filenames do not match expected list!")
        if missing:
            print(f"  Missing (expected but not generated): {sorted(missing)}")
        if extra:
            print(f"  Extra (generated but not expected): {sorted(extra)}")
        print("\nUpdate shared/fixtures_expected.py to match generated fixtures.")
        return 1

    print(f"\nAll {EXPECTED_FIXTURE_COUNT} fixtures verified successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
