"""Convert gocheck test runner output into subunit test events."""
