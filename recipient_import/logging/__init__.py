"""Application logging: labeled stdout logger and the validation error log."""
