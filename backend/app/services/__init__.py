"""Query, write and statistics services over the employee table."""
