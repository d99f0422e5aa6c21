"""GBF container tooling. See `gbf.api.irep`."""
