"""Event handlers of the application state machine, grouped by concern."""
