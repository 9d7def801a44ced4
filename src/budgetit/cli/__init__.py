"""Command line interface for budgetit."""
