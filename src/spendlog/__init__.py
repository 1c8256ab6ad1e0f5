"""spendlog: personal expense tracker."""

__version__ = "0.1.0"


def __getattr__(name):
    # cli.main imports the whole package, so load it on first access
    if name == "main":
        from spendlog.cli.main import main

        return main
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
