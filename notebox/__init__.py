"""
NoteBox.

- backend/: Note model, query engine, persistence, configuration
- cli/: Command-line client (Typer + Rich)
"""
