"""Single source of truth for expected test fixtures.

This module defines the list of expected fixture filenames used by both:
- scripts/gen_fixtures.py (generation verification)
- tests/infrastructure/test_fixtures_sanity.py (existence verification)

Location: shared/ (not tests/) to avoid scripts->tests dependency.

When adding/removing fixtures, update ONLY this list.
"""

from __future__ import annotations

# Sorted alphabetically for deterministic comparison.
EXPECTED_FIXTURES: list[str] = sorted(
    [
        "empty.json",  # Zero-byte payload rejection
        "overpass_malformed.json",  # Truncated JSON rejection
        "overpass_mixed.json",  # Happy path: every resource type, nodes and ways
        "overpass_no_elements.json",  # Valid JSON without an elements list
        "overpass_unsupported_only.json",  # Only unsupported / coordinate-less elements
        "payload.txt",  # Non-JSON extension rejection
    ]
)

# Count derived from list for verification
EXPECTED_FIXTURE_COUNT: int = len(EXPECTED_FIXTURES)
