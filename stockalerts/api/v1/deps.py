# stockalerts/api/v1/deps.py
from stockalerts.domain.alerts.service import AccessChecker, allow_all


def get_company_access_checker() -> AccessChecker:
    """Hook for the host application's authorization layer.

    Override with app.dependency_overrides to return a callable that answers
    whether the current caller may read a company's data.
    """
    return allow_all
