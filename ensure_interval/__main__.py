"""Enable running as: python -m ensure_interval

Usage:
    python -m ensure_interval --help
    python -m ensure_interval run --jobs myapp.jobs:load_jobs
"""

from ensure_interval.cli.main import cli

if __name__ == "__main__":
    cli()
