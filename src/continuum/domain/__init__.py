"""Domain layer for continuum application."""

_SERVICES = {
    "SubscriptionService": "continuum.domain.subscription",
    "AssetService": "continuum.domain.asset",
    "WarrantyService": "continuum.domain.warranty",
    "BackupService": "continuum.domain.backup",
    "DashboardService": "continuum.domain.dashboard",
    "CalendarService": "continuum.domain.calendar",
}

__all__ = list(_SERVICES)


# Services import the database layer, which imports domain entities, so they
# are resolved lazily to keep this package import-cycle free.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
