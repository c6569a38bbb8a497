"""Runtime support (telemetry) for yaml_edit."""
