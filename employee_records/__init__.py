"""Client for the employee records API: HTTP client, sync repository and terminal UI."""
