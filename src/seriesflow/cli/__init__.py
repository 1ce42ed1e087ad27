"""CLI tools for seriesflow"""
__all__ = ["app"]
def __getattr__(name):
    if name == "app":
        from seriesflow.cli.main import app
        return app
    raise AttributeError(f"module {__name__} has no attribute {name}")
