"""Public tooling surfaces (`gbf.api.irep`)."""
