"""Built-in CLI commands registered on the root Typer app in :mod:`specweave.app`."""
