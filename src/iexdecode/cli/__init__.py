"""Command-line interface for iexdecode."""
