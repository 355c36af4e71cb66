"""Actions package - Action layer with explicit contracts.

Each action declares:
- read_only: Whether it modifies anything
- requires_backup: Whether backup is mandatory
- rollback_support: Whether it can undo changes
- prerequisites: What must pass before action runs
"""

from nginx_route_check.actions.report import ReportAction

__all__ = ["ReportAction"]
