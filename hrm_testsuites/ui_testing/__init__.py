"""Browser-based login suite: framework, page objects, lifecycle and tests."""
