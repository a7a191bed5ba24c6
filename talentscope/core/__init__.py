"""
Core business logic modules for TalentScope.

Submodules:
- visibility: Reporting-tree resolution and record visibility scopes
- reporting: Status timestamps, attribution, and report aggregation
"""
