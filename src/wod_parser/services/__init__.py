"""Services around the parsing engine: rendering and the movement catalog."""
