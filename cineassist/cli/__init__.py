"""Command-line tools for cineAssist.

- ``python -m cineassist.cli search <query> [--page N]``: one-shot search
- ``python -m cineassist.cli ask <query>``: one assistant turn

Pass ``--json`` (before the subcommand) for machine-readable output.
"""
