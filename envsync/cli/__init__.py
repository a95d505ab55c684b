"""envsync CLI: Typer-based command-line interface.

Provides the ``envsync`` command with subcommands for capturing snapshots,
comparing them, gating CI on drift severity and synchronizing environments.

All output uses Rich for formatted terminal display.
"""
