"""Tool wrappers used by the scanner."""
