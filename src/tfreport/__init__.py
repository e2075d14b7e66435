"""tfreport — pull request reporting and job gating for Terraform pipelines."""

__version__ = "0.1.0"
