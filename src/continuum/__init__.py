"""Continuum: subscriptions, personal assets and warranties in one local store."""

__version__ = "0.1.0"


# The CLI pulls in every layer, so it is only imported on first access
def __getattr__(name):
    if name == "main":
        from continuum.cli.main import main

        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
