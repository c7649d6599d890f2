"""Foundation layer: errors, logging, configuration."""
