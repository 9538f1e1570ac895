"""tknpac - status reporting and scaffolding for Pipelines-as-Code repositories."""

__version__ = "0.1.0"
