"""Settings and logging configuration shared by the CLI and the readers."""
