"""Service layer for lexicon.

Services never import from lexicon.ui, lexicon.cli, or typer. The CLI
handles presentation.
"""
