"""
Core business logic modules for Talent-Match.

Submodules:
- matching: Candidate pool selection, scoring and match persistence
- jobs: Job write path that triggers auto-matching
"""
