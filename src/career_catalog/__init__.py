"""Career catalog models and loaders."""
