"""CLI commands for spendlog."""
