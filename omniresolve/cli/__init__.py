"""omniresolve CLI — Typer-based command-line interface.

Provides the ``omniresolve`` command with subcommands for resolving
artifacts and previewing the search query sent to Artifactory.

All output uses Rich for formatted terminal display.
"""
