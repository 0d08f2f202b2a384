"""Static asset resolution and serving."""
