"""Import orchestration around the matcher and transformer."""
