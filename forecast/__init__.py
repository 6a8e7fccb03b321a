"""Weather forecast service and the tooling to run its database."""
