"""Terminal UI for findpeople."""
