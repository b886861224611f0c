"""Output layer — result formatting and the terminal picker."""
