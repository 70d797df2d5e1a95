__version__ = "0.1.0"

__all__ = [
    "__version__",
    "config",
    "contracts",
    "core",
    "errors",
    "exit_codes",
    "launcher",
    "pipeline",
    "run_id",
]
