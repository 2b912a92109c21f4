"""
Services Layer

Championship core logic:
- fixture_generator: pure round-robin generation and validation
- standings_engine: aggregation, tie-break ordering and recomputation
- match_results: set validation and result submission
- fixture_service: generate + persist a championship schedule
- championship_repository: data access used by the above
"""
