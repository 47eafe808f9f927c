"""AI Builder project catalog service."""
