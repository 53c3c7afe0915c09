"""TfL data access, polling and the host event loop."""
