"""Domain-specific library modules.

Modules here provide the pure matching logic (normalization, query
planning, scoring). Network and orchestration code lives in
``ytmatch.services`` instead.

Consumers should import directly from submodules::

    from ytmatch.lib.normalize import normalize
    from ytmatch.lib.matching import MatchScorer
"""
