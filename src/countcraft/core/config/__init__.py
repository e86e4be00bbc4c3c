"""Counter validation, value coercion and settings persistence."""
