"""Lint GitLab CI definition files against the GitLab CI Lint API."""

__version__ = "0.1.0"

APP_NAME = "cilint"

__all__ = ["APP_NAME", "__version__"]
