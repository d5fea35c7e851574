"""Domain layer: dependency model, store ports and reconciliation."""
