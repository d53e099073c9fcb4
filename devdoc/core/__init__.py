"""GUI-agnostic core: data model, importers, services and the extension."""
