"""Web package - Local JSON API around the check pipeline."""
