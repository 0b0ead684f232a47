"""
Meal Log View Engine.

Normalizes the loosely-typed meal store collection into canonical records
and derives every view of it locally (dashboard counters, filtered and
sorted listings, recency labels) without refetching.

Structure:
- domain/: Canonical models, normalizer, filter/sort/stats/recency engines
- infrastructure/: Meal store adapters (REST API, in-memory)
- application/: The meal log view controller owning session state
- scripts/: Command-line entry points
- tests/: Test suite
"""

__version__ = "1.0.0"
