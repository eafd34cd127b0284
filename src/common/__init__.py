"""Models, configuration and error types shared by the counting core."""
