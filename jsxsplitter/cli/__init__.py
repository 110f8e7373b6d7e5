"""Command-line interface helpers for JSX Splitter."""
