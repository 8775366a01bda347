"""Template marketplace content-integrity engine."""
