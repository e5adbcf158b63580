"""Task scheduling, visibility and lifecycle."""
