"""Cash Declaration Checker service."""
